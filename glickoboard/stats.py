"""running prediction accuracy and squared error for each rating model"""
import math
from typing import Iterable

MODEL_TAGS = ('glicko', 'glicko2', 'continuous_glicko2')
REFERENCE_TAG = 'reference'

# short labels for the stats line
LABELS = {
    'glicko': 'G1',
    'glicko2': 'G2',
    'continuous_glicko2': 'L2',
    REFERENCE_TAG: 'reference',
}


def ternary_expectation(rating: float, opponent_rating: float) -> float:
    """higher rating is predicted to win, equal ratings to draw"""
    if rating > opponent_rating:
        return 1.0
    if rating < opponent_rating:
        return 0.0
    return 0.5


def is_correct(score: float, expected: float) -> bool:
    return math.fabs(score - expected) < 0.5


class StatsAccumulator:
    """
    Counters for how often each model's discretized prediction was right and for the
    mean squared error of its smooth expectation.
    """

    def __init__(self, tags: Iterable[str] = MODEL_TAGS + (REFERENCE_TAG,)):
        self.tags = tuple(tags)
        self.reset()

    def reset(self):
        self.guesses = dict.fromkeys(self.tags, 0)
        self.predicted = dict.fromkeys(self.tags, 0)
        self.mse_accum = dict.fromkeys(self.tags, 0.0)
        self.mse_total = dict.fromkeys(self.tags, 0)

    def _check_tag(self, tag):
        if tag not in self.guesses:
            raise ValueError(f'unknown model tag: {tag}')

    def record_prediction(self, tag: str, correct: bool):
        self._check_tag(tag)
        self.guesses[tag] += 1
        if correct:
            self.predicted[tag] += 1

    def record_squared_error(self, tag: str, error: float):
        self._check_tag(tag)
        self.mse_total[tag] += 1
        self.mse_accum[tag] += error

    def summary(self) -> dict:
        """
        Per tag prediction rate in percent and mean squared error.

        Tags without observations get nan for the affected value and has_data=False.
        """
        summary = {}
        for tag in self.tags:
            guesses = self.guesses[tag]
            mse_count = self.mse_total[tag]
            summary[tag] = {
                'guesses': guesses,
                'prediction_rate': 100.0 * self.predicted[tag] / guesses if guesses else math.nan,
                'mse_count': mse_count,
                'mse': self.mse_accum[tag] / mse_count if mse_count else math.nan,
                'has_data': guesses > 0 or mse_count > 0,
            }
        return summary


def format_summary(summary: dict) -> str:
    """one line per batch for monitoring, e.g. '52.100% G1 p-rate, 0.2100 G1 MSE, ...'"""
    parts = []
    for tag, stats in summary.items():
        label = LABELS.get(tag, tag)
        if not stats['has_data']:
            parts.append(f'no data {label}')
            continue
        if stats['guesses']:
            parts.append(f'{stats["prediction_rate"]:.3f}% {label} p-rate')
        if stats['mse_count']:
            parts.append(f'{stats["mse"]:.4f} {label} MSE')
    return ', '.join(parts)
