"""
Glicko
http://www.glicko.net/glicko/glicko.pdf
http://www.glicko.net/research/glicko.pdf
"""
import math
from dataclasses import dataclass
from typing import Optional
import numpy as np
from glickoboard.core.base import RatingModel, check_score
from glickoboard.utils.math_utils import sigmoid, base_10_sigmoid
from glickoboard.utils.constants import PI2, Q, Q2, Q2_3


@dataclass(frozen=True)
class GlickoRating:
    """rating and rating deviation on the usual 1500 centered scale"""

    rating: float
    rd: float

    def __str__(self):
        return f'{self.rating}±{self.rd}'


class Glicko(RatingModel):
    """
    Implements the original Glicko rating system, designed by Mark Glickman, with the
    rating period shrunk down to a single game and the deviation increase driven by the
    real time elapsed since a competitor's previous game.
    """

    name = 'glicko'

    def __init__(
        self,
        initial_rating: float = 1500.0,
        initial_rating_dev: float = 350.0,
        min_rating_dev: float = 30.0,
        idle_days: float = 5.0 * 365.0,
        c: Optional[float] = None,
    ):
        """
        Initializes the Glicko rating model with the given parameters.

        Parameters:
            initial_rating (float, optional): The rating of new competitors. Defaults to 1500.0.
            initial_rating_dev (float, optional): The rating deviation of new competitors, also the
                maximum deviation reachable through inactivity. Defaults to 350.0.
            min_rating_dev (float, optional): Floor applied to the deviation after every update. Defaults to 30.0.
            idle_days (float, optional): Days of inactivity after which a competitor sitting at the minimum
                deviation is back to the initial deviation. Used to derive c. Defaults to 5 years.
            c (float, optional): Explicit deviation growth per sqrt(day), overrides the value derived
                from idle_days.
        """
        if not 0.0 < min_rating_dev <= initial_rating_dev:
            raise ValueError('need 0 < min_rating_dev <= initial_rating_dev')
        if idle_days <= 0.0:
            raise ValueError('idle_days must be positive')
        self.initial_rating = initial_rating
        self.initial_rating_dev = initial_rating_dev
        self.min_rating_dev = min_rating_dev
        self.idle_days = idle_days
        if c is None:
            # sqrt(min_dev^2 + c^2 * idle_days) == initial_dev
            self.c2 = (initial_rating_dev**2.0 - min_rating_dev**2.0) / idle_days
        else:
            self.c2 = c**2.0

    @staticmethod
    def g_scalar(rating_dev):
        """
        Calculates the g function as part of the Glicko rating system.

        This function is used to scale the rating deviation, affecting the impact of a game outcome
        as a function of the opponent's rating volatility.
        """
        return 1.0 / math.sqrt(1.0 + (Q2_3 * (rating_dev) ** 2.0) / PI2)

    @staticmethod
    def g_vector(rating_dev):
        return 1.0 / np.sqrt(1.0 + (Q2_3 * np.square(rating_dev)) / PI2)

    @classmethod
    def calc_e(cls, rating_dev, rating, opponent_rating):
        """expected score against an opponent whose uncertainty is rating_dev"""
        return base_10_sigmoid(cls.g_scalar(rating_dev) * (rating - opponent_rating) / 400.0)

    def initial_state(self) -> GlickoRating:
        return GlickoRating(rating=self.initial_rating, rd=self.initial_rating_dev)

    def decayed_rd(self, state: GlickoRating, days: float) -> float:
        """model the increase in variance over `days` of inactivity"""
        return min(math.sqrt(state.rd**2.0 + (days * self.c2)), self.initial_rating_dev)

    def pre_match(self, state: GlickoRating, days: float = 0.0):
        return state.rating, self.decayed_rd(state, days)

    def expect(self, state: GlickoRating, opponent: GlickoRating, days: float = 0.0, opponent_days: float = 0.0):
        pre_rd = self.decayed_rd(state, days)
        pre_rd_opp = self.decayed_rd(opponent, opponent_days)
        combined_rd = math.sqrt(pre_rd**2.0 + pre_rd_opp**2.0)
        return self.calc_e(combined_rd, state.rating, opponent.rating)

    def predict(self, locations_1, deviations_1, locations_2, deviations_2):
        """generate predictions"""
        rating_diffs = np.asarray(locations_1) - np.asarray(locations_2)
        combined_dev = self.g_vector(np.sqrt(np.square(deviations_1) + np.square(deviations_2)))
        return sigmoid(Q * combined_dev * rating_diffs)

    def update(
        self, state: GlickoRating, score: float, opponent: GlickoRating, days: float = 0.0, opponent_days: float = 0.0
    ) -> GlickoRating:
        score = check_score(score)
        pre_rd = self.decayed_rd(state, days)
        pre_rd_opp = self.decayed_rd(opponent, opponent_days)

        # only the opponent's uncertainty goes into the expectation used for the update
        prob = self.calc_e(pre_rd_opp, state.rating, opponent.rating)
        g = self.g_scalar(pre_rd_opp)
        d2 = 1.0 / (Q2 * (g**2.0) * prob * (1.0 - prob))

        r_denom = (1.0 / (pre_rd**2.0)) + (1.0 / d2)
        new_rating = state.rating + (Q / r_denom) * g * (score - prob)
        new_rd = math.sqrt(1.0 / r_denom)
        return GlickoRating(rating=new_rating, rd=max(new_rd, self.min_rating_dev))
