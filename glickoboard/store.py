"""players keyed by identifier and the protocol for applying one game to both of them"""
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
import numpy as np
from glickoboard.configs import build_models
from glickoboard.core.base import RatingModel
from glickoboard.feeds import Color, GameRecord
from glickoboard.stats import REFERENCE_TAG, StatsAccumulator, format_summary, is_correct, ternary_expectation
from glickoboard.utils.date_utils import days_between


@dataclass(frozen=True)
class Player:
    """one state per rating model, all of them last updated at last_update"""

    ratings: Dict[str, object]
    last_update: datetime

    @classmethod
    def new(cls, models: Dict[str, RatingModel], timestamp: datetime) -> 'Player':
        return cls(ratings={name: model.initial_state() for name, model in models.items()}, last_update=timestamp)

    def __getitem__(self, name):
        return self.ratings[name]


class PlayerStore:
    """
    Mapping from player identifier to Player.

    Games are applied one at a time in chronological order. The lock only guards the
    player map and the stats reference, it does not make out of order application safe.
    """

    def __init__(self, models: Optional[Dict[str, RatingModel]] = None, stats: Optional[StatsAccumulator] = None):
        self.models = build_models() if models is None else dict(models)
        self.primary = next(iter(self.models))
        self.players: Dict[str, Player] = {}
        self._stats = stats if stats is not None else self._new_stats()
        self._lock = threading.RLock()

    def _new_stats(self) -> StatsAccumulator:
        return StatsAccumulator(tuple(self.models) + (REFERENCE_TAG,))

    def __len__(self):
        with self._lock:
            return len(self.players)

    def __contains__(self, identifier):
        with self._lock:
            return identifier in self.players

    def player_count(self) -> int:
        with self._lock:
            return len(self.players)

    def get(self, identifier: str) -> Optional[Player]:
        with self._lock:
            return self.players.get(identifier)

    def get_or_create(self, identifier: str, timestamp: datetime) -> Player:
        """missing players start unrated with last_update at the time of the game that introduces them"""
        with self._lock:
            player = self.players.get(identifier)
        if player is None:
            player = Player.new(self.models, timestamp)
        return player

    @property
    def stats(self) -> StatsAccumulator:
        return self._stats

    def stats_reset(self):
        """swap in fresh counters, never visible half reset to apply()"""
        with self._lock:
            self._stats = self._new_stats()

    def get_stats(self) -> str:
        with self._lock:
            return format_summary(self._stats.summary())

    def record_predictions(self, player: Player, opponent: Player, score: float, now: datetime, record: Optional[GameRecord]):
        """discretized and smooth predictions of every model for a game about to be applied"""
        days = days_between(player.last_update, now)
        opponent_days = days_between(opponent.last_update, now)
        stats = self._stats
        for name, model in self.models.items():
            state = player[name]
            opponent_state = opponent[name]
            expected = ternary_expectation(state.rating, opponent_state.rating)
            stats.record_prediction(name, is_correct(score, expected))
            smooth = model.expect(state, opponent_state, days=days, opponent_days=opponent_days)
            stats.record_squared_error(name, (score - smooth) ** 2.0)
        if record is not None:
            expected = ternary_expectation(record.white_reference_rating, record.black_reference_rating)
            stats.record_prediction(REFERENCE_TAG, is_correct(score, expected))

    def update_player(self, player: Player, score: float, now: datetime, opponent: Player) -> Player:
        """update every model of `player` against `opponent` and move last_update to now"""
        days = days_between(player.last_update, now)
        opponent_days = days_between(opponent.last_update, now)
        ratings = {
            name: model.update(player[name], score, opponent[name], days=days, opponent_days=opponent_days)
            for name, model in self.models.items()
        }
        return replace(player, ratings=ratings, last_update=now)

    def apply(self, record: GameRecord):
        """
        Apply one rated game with a settled outcome to both players.

        White is updated against black as it was before the game, black is then updated
        against white as it is after white's update. The ordering is kept on purpose, the
        ratings it produces depend on it. Any ConvergenceFailure from a model propagates
        and nothing is written back for the game.
        """
        now = record.timestamp
        with self._lock:
            white = self.get_or_create(record.white, now)
            black = self.get_or_create(record.black, now)

            white_score = record.score(Color.WHITE)
            black_score = record.score(Color.BLACK)

            # predictions are only tracked from white's side
            self.record_predictions(white, black, white_score, now, record)

            white = self.update_player(white, white_score, now, black)
            black = self.update_player(black, black_score, now, white)

            self.players[record.white] = white
            self.players[record.black] = black

    def apply_many(self, records: Iterable[GameRecord]) -> int:
        count = 0
        for record in records:
            self.apply(record)
            count += 1
        return count

    def leaderboard(self) -> List[Tuple[str, Player]]:
        """players sorted by the lower confidence bound of the primary model, best first"""
        with self._lock:
            items = list(self.players.items())
        if not items:
            return []
        model = self.models[self.primary]
        lcbs = np.array([model.lower_confidence_bound(player[self.primary]) for _, player in items])
        sorted_idxs = np.argsort(-lcbs, kind='stable')
        return [items[idx] for idx in sorted_idxs]

    def predict(self, matchups: Iterable[Tuple[str, str]], now: datetime, model: Optional[str] = None) -> np.ndarray:
        """
        Smooth probabilities that the first player of each pair beats the second if they
        played at `now`. Unknown players are treated as new players.
        """
        name = self.primary if model is None else model
        if name not in self.models:
            raise ValueError(f'unknown rating model: {name}')
        rating_model = self.models[name]
        pre_match = []
        with self._lock:
            for pair in matchups:
                for identifier in pair:
                    player = self.get_or_create(identifier, now)
                    pre_match.append(rating_model.pre_match(player[name], days_between(player.last_update, now)))
        if not pre_match:
            return np.empty(0)
        values = np.array(pre_match).reshape(-1, 2, 2)
        return rating_model.predict(values[:, 0, 0], values[:, 0, 1], values[:, 1, 0], values[:, 1, 1])
