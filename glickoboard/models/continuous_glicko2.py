"""
Glicko 2 with continuous rating periods

The deviation of a competitor grows with the real time elapsed since their last game,
prorated in fractions of a fixed rating period, instead of counting every game as
exactly one period.
"""
import math
from glickoboard.core.base import check_score
from glickoboard.models.glicko2 import Glicko2, Glicko2Rating
from glickoboard.utils.constants import GLICKO2_SCALE
from glickoboard.utils.date_utils import duration_days


class ContinuousGlicko2(Glicko2):
    """
    Glicko 2 with time prorated deviation growth, a floor on phi and a cap on sigma.

    By default the opponent's own inactivity is not taken into account when updating,
    which overstates how reliable the opponent's rating is. Pass decay_opponent=True to
    decay the opponent's phi before computing g and the expected score.
    """

    name = 'continuous_glicko2'

    def __init__(
        self,
        initial_rating: float = 1500.0,
        initial_rd: float = 350.0,
        initial_sigma: float = 0.06,
        tau: float = 0.75,
        epsilon: float = 1e-5,
        max_iter: int = 30,
        max_bracket_steps: int = 100,
        # chosen so a typical competitor's deviation goes from 60 to 110 in a year
        rating_period=4.665,
        max_rd: float = 350.0,
        min_rd: float = 60.0,
        max_sigma: float = 0.1,
        decay_opponent: bool = False,
    ):
        """
        Initializes the continuous Glicko 2 rating model.

        Parameters:
            rating_period (float or str, optional): Length of one rating period, either in days or as a
                duration string like '4D'. Defaults to 4.665 days.
            max_rd (float, optional): Display scale cap on the deviation after inactivity. Defaults to 350.0.
            min_rd (float, optional): Display scale floor on the deviation after an update. Defaults to 60.0.
            max_sigma (float, optional): Cap on the volatility after an update. Defaults to 0.1.
            decay_opponent (bool, optional): Decay the opponent's phi for inactivity in update(). Defaults to False.

        The remaining parameters are the same as for Glicko2.
        """
        super().__init__(
            initial_rating=initial_rating,
            initial_rd=initial_rd,
            initial_sigma=initial_sigma,
            tau=tau,
            epsilon=epsilon,
            max_iter=max_iter,
            max_bracket_steps=max_bracket_steps,
        )
        self.rating_period_days = duration_days(rating_period)
        if self.rating_period_days <= 0.0:
            raise ValueError('rating_period must be positive')
        if not 0.0 < min_rd <= max_rd:
            raise ValueError('need 0 < min_rd <= max_rd')
        self.max_phi = max_rd / GLICKO2_SCALE
        self.min_phi = min_rd / GLICKO2_SCALE
        self.max_sigma = max_sigma
        self.decay_opponent = decay_opponent

    def periods(self, days: float) -> float:
        return days / self.rating_period_days

    def decayed_phi(self, state: Glicko2Rating, days: float) -> float:
        """phi after `days` of inactivity, using the volatility the competitor currently has"""
        new_phi = math.sqrt(state.phi**2.0 + (self.periods(days) * state.sigma**2.0))
        return min(new_phi, self.max_phi)

    def pre_match(self, state: Glicko2Rating, days: float = 0.0):
        return state.mu, self.decayed_phi(state, days)

    def update(
        self, state: Glicko2Rating, score: float, opponent: Glicko2Rating, days: float = 0.0, opponent_days: float = 0.0
    ) -> Glicko2Rating:
        score = check_score(score)
        if self.decay_opponent:
            opponent_phi = self.decayed_phi(opponent, opponent_days)
        else:
            opponent_phi = opponent.phi
        prob, g, v, delta = self.game_terms(state, score, opponent.mu, opponent_phi)

        # the volatility is solved on the undecayed phi, the elapsed time enters below with the new sigma
        sigma_prime = self.get_sigma_prime(state.phi, delta, v, state.sigma)

        phi_star = math.sqrt(state.phi**2.0 + (self.periods(days) * sigma_prime**2.0))
        phi_prime = 1.0 / math.sqrt((1.0 / (phi_star**2.0)) + (1.0 / v))
        mu_prime = state.mu + (phi_prime**2.0) * g * (score - prob)
        return Glicko2Rating(
            mu=mu_prime,
            phi=max(phi_prime, self.min_phi),
            sigma=min(sigma_prime, self.max_sigma),
        )
