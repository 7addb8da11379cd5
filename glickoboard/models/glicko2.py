"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import math
import logging
from dataclasses import dataclass
import numpy as np
from glickoboard.core.base import RatingModel, check_score
from glickoboard.core.errors import ConvergenceFailure
from glickoboard.utils.math_utils import sigmoid, sigmoid_scalar
from glickoboard.utils.constants import THREE_OVER_PI_SQUARED, GLICKO2_SCALE, BASE_RATING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Glicko2Rating:
    """mu, phi and sigma on the internal Glicko 2 scale"""

    mu: float
    phi: float
    sigma: float

    @property
    def rating(self) -> float:
        return BASE_RATING + self.mu * GLICKO2_SCALE

    @property
    def rd(self) -> float:
        return self.phi * GLICKO2_SCALE

    def __str__(self):
        return f'{self.rating:.1f},{self.rd:.1f},{self.sigma:.4f}'


def find_lower_bracket(f, a: float, tau: float, max_steps: int) -> float:
    """step down from a in increments of tau until f is non negative"""
    k = 1
    while f(a - k * tau) < 0:
        k += 1
        if k > max_steps:
            raise ConvergenceFailure('bracket', k - 1, (a - (k - 1) * tau, a))
    return a - k * tau


def illinois_root(f, A: float, B: float, epsilon: float, max_iter: int) -> float:
    """
    Regula falsi with the Illinois modification, as described in step 5 of the Glicko 2 example.

    Returns the end of the final bracket on the A side once |A - B| <= epsilon.
    """
    f_A = f(A)
    f_B = f(B)
    iters = 0
    while math.fabs(A - B) > epsilon:
        if iters >= max_iter or f_B == f_A:
            raise ConvergenceFailure('root', iters, (A, B))
        C = A + ((A - B) * f_A) / (f_B - f_A)
        f_C = f(C)
        if (f_C * f_B) <= 0:
            A = B
            f_A = f_B
        else:
            f_A = f_A / 2.0
        B = C
        f_B = f_C
        iters += 1
    return A


class Glicko2(RatingModel):
    """
    Implements the Glicko 2 rating system, designed by Mark Glickman, treating every
    game as its own rating period. There is no time based deviation increase in this
    model, phi only widens through the volatility driven update.
    """

    name = 'glicko2'

    def __init__(
        self,
        initial_rating: float = 1500.0,
        initial_rd: float = 350.0,
        initial_sigma: float = 0.06,
        tau: float = 0.75,
        epsilon: float = 1e-5,
        max_iter: int = 30,
        max_bracket_steps: int = 100,
    ):
        """
        Initializes the Glicko 2 rating model with the given parameters.

        Parameters:
            initial_rating (float, optional): Display scale rating of new competitors. Defaults to 1500.0.
            initial_rd (float, optional): Display scale deviation of new competitors. Defaults to 350.0.
            initial_sigma (float, optional): Volatility of new competitors. Defaults to 0.06.
            tau (float, optional): Constrains how fast the volatility can change. Defaults to 0.75.
            epsilon (float, optional): Convergence tolerance of the volatility solver. Defaults to 1e-5.
            max_iter (int, optional): Iteration cap of the volatility root finding. Defaults to 30.
            max_bracket_steps (int, optional): Step cap of the search for the lower bracket. Defaults to 100.
        """
        if tau <= 0.0:
            raise ValueError('tau must be positive')
        self.initial_mu = (initial_rating - BASE_RATING) / GLICKO2_SCALE
        self.initial_phi = initial_rd / GLICKO2_SCALE
        self.initial_sigma = initial_sigma
        self.tau = tau
        self.tau2 = tau**2.0
        self.epsilon = epsilon
        self.max_iter = max_iter
        self.max_bracket_steps = max_bracket_steps

    @staticmethod
    def g_scalar(phi):
        """this is DIFFERENT from g in regular Glicko"""
        return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))

    @staticmethod
    def g_vector(phi):
        """vector version"""
        return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(phi)))

    def initial_state(self) -> Glicko2Rating:
        return Glicko2Rating(mu=self.initial_mu, phi=self.initial_phi, sigma=self.initial_sigma)

    def pre_match(self, state: Glicko2Rating, days: float = 0.0):
        return state.mu, math.sqrt(state.phi**2.0 + state.sigma**2.0)

    def expect(self, state: Glicko2Rating, opponent: Glicko2Rating, days: float = 0.0, opponent_days: float = 0.0):
        mu, pre_phi = self.pre_match(state, days)
        opp_mu, pre_phi_opp = self.pre_match(opponent, opponent_days)
        combined_phi = math.sqrt(pre_phi**2.0 + pre_phi_opp**2.0)
        return sigmoid_scalar(self.g_scalar(combined_phi) * (mu - opp_mu))

    def predict(self, locations_1, deviations_1, locations_2, deviations_2):
        """generate predictions"""
        mu_diff = np.asarray(locations_1) - np.asarray(locations_2)
        combined_phi = self.g_vector(np.sqrt(np.square(deviations_1) + np.square(deviations_2)))
        return sigmoid(combined_phi * mu_diff)

    def f(self, x, delta2, phi2, v, a):
        ex = math.exp(x)
        phi2_v_ex = phi2 + v + ex
        num_1 = ex * (delta2 - phi2_v_ex)
        denom_1 = 2 * ((phi2_v_ex) ** 2.0)
        term_2 = (x - a) / self.tau2
        return (num_1 / denom_1) - term_2

    def get_sigma_prime(self, phi, delta, v, sigma):
        """solve for the new volatility, raises ConvergenceFailure if either loop hits its cap"""
        delta2 = delta**2.0
        phi2 = phi**2.0
        a = math.log(sigma**2.0)

        def f(x):
            return self.f(x, delta2, phi2, v, a)

        try:
            if delta2 > (phi2 + v):
                B = math.log(delta2 - phi2 - v)
            else:
                B = find_lower_bracket(f, a, self.tau, self.max_bracket_steps)
            A = illinois_root(f, a, B, self.epsilon, self.max_iter)
        except ConvergenceFailure:
            logger.debug('volatility solver failed for phi=%s delta=%s v=%s sigma=%s', phi, delta, v, sigma)
            raise
        return math.exp(A / 2.0)

    def game_terms(self, state: Glicko2Rating, score: float, opponent_mu: float, opponent_phi: float):
        """expected score, g of the opponent, estimated variance v and improvement delta for one game"""
        g = self.g_scalar(opponent_phi)
        prob = sigmoid_scalar(g * (state.mu - opponent_mu))
        v = 1.0 / ((g**2.0) * prob * (1.0 - prob))
        delta = v * g * (score - prob)
        return prob, g, v, delta

    def update(
        self, state: Glicko2Rating, score: float, opponent: Glicko2Rating, days: float = 0.0, opponent_days: float = 0.0
    ) -> Glicko2Rating:
        score = check_score(score)
        prob, g, v, delta = self.game_terms(state, score, opponent.mu, opponent.phi)

        sigma_prime = self.get_sigma_prime(state.phi, delta, v, state.sigma)

        phi_star = math.sqrt(state.phi**2.0 + sigma_prime**2.0)
        phi_prime = 1.0 / math.sqrt((1.0 / (phi_star**2.0)) + (1.0 / v))
        mu_prime = state.mu + (phi_prime**2.0) * g * (score - prob)
        return Glicko2Rating(mu=mu_prime, phi=phi_prime, sigma=sigma_prime)
