"""three Glicko flavours tracked side by side over a chronological stream of games"""
from glickoboard.core.errors import ConvergenceFailure
from glickoboard.models import Glicko, Glicko2, ContinuousGlicko2, GlickoRating, Glicko2Rating
from glickoboard.feeds import Color, Outcome, TimeControl, GameRecord, records_from_frame
from glickoboard.stats import StatsAccumulator, format_summary
from glickoboard.store import Player, PlayerStore
from glickoboard.configs import default_params, build_models
