"""
Models Module
=============

This module contains the rating models tracked side by side for every player. Each model
holds only its hyperparameters and knows how to create, decay, compare and update the
small immutable per player states.

Included Rating Systems:
- Glicko: Rating and rating deviation, with the deviation growing with real elapsed time.
- Glicko2: Adds a volatility solved for after every game, one rating period per game.
- ContinuousGlicko2: Glicko 2 with deviation growth prorated by elapsed time over a fixed rating period.

"""
from glickoboard.models.glicko import Glicko, GlickoRating
from glickoboard.models.glicko2 import Glicko2, Glicko2Rating
from glickoboard.models.continuous_glicko2 import ContinuousGlicko2

MODELS = {model.name: model for model in (Glicko, Glicko2, ContinuousGlicko2)}
