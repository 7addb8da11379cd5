"""base class for the per-player rating models"""
from abc import ABC, abstractmethod
from typing import Tuple
import numpy as np

VALID_SCORES = (0.0, 0.5, 1.0)


def check_score(score: float) -> float:
    """scores are win (1), draw (0.5) or loss (0) from the point of view of the updated player"""
    if score not in VALID_SCORES:
        raise ValueError(f'score must be one of {VALID_SCORES}, got {score}')
    return float(score)


class RatingModel(ABC):
    """
    Base class for the rating models tracked for every player. A model holds only
    hyperparameters, the per player state lives in small immutable dataclasses which
    the model knows how to create, decay, compare and update.

    Attributes:
        name (str): tag used for the model in player records, stats and reports.
    """

    name: str

    @abstractmethod
    def initial_state(self):
        """state of a competitor who has never played"""

    @abstractmethod
    def pre_match(self, state, days: float = 0.0) -> Tuple[float, float]:
        """
        Location and deviation used when predicting a game played `days` after the last update.

        Parameters:
            state: the competitor state
            days (float): elapsed days since the competitor's last update

        Returns:
            tuple: (location, deviation) on the scale the model's predict() works on
        """

    @abstractmethod
    def expect(self, state, opponent, days: float = 0.0, opponent_days: float = 0.0) -> float:
        """
        Smooth probability that the competitor with `state` beats `opponent`.

        Parameters:
            state: the competitor state
            opponent: the opponent state
            days (float): elapsed days since the competitor's last update
            opponent_days (float): elapsed days since the opponent's last update
        """

    @abstractmethod
    def update(self, state, score: float, opponent, days: float = 0.0, opponent_days: float = 0.0):
        """
        Returns a new state for the competitor after one game against `opponent`.

        Parameters:
            state: the competitor state before the game
            score (float): 1.0 for a win, 0.5 for a draw and 0.0 for a loss
            opponent: the opponent state used as the reference for the update
            days (float): elapsed days since the competitor's last update
            opponent_days (float): elapsed days since the opponent's last update
        """

    @abstractmethod
    def predict(
        self,
        locations_1: np.ndarray,
        deviations_1: np.ndarray,
        locations_2: np.ndarray,
        deviations_2: np.ndarray,
    ) -> np.ndarray:
        """vectorized version of expect() operating on values returned by pre_match()"""

    def lower_confidence_bound(self, state) -> float:
        """display scale rating minus two deviations"""
        return state.rating - 2.0 * state.rd
