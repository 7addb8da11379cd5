"""game records consumed by the player store, and an adapter for tabular game data"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Optional
import polars as pl


class Color(Enum):
    WHITE = 'white'
    BLACK = 'black'


class Outcome(Enum):
    WHITE_WIN = '1-0'
    BLACK_WIN = '0-1'
    DRAW = '1/2-1/2'

    @classmethod
    def from_result(cls, result: Optional[str]) -> Optional['Outcome']:
        """map a result string to an outcome, anything unsettled like '*' maps to None"""
        for outcome in cls:
            if outcome.value == result:
                return outcome
        return None

    def score(self, color: Color) -> float:
        """win=1, draw=0.5, loss=0 from the point of view of `color`"""
        if self is Outcome.DRAW:
            return 0.5
        winner = Color.WHITE if self is Outcome.WHITE_WIN else Color.BLACK
        return 1.0 if winner is color else 0.0


class TimeControl(Enum):
    GARBAGE = 'garbage'
    BULLET = 'bullet'
    BLITZ = 'blitz'
    RAPID = 'rapid'
    CLASSICAL = 'classical'
    CORRESPONDENCE = 'correspondence'


@dataclass(frozen=True)
class GameRecord:
    """one finished game between two players"""

    white: str
    black: str
    outcome: Optional[Outcome]
    timestamp: datetime
    rated: bool = True
    time_control: TimeControl = TimeControl.GARBAGE
    white_reference_rating: int = 1500
    black_reference_rating: int = 1500

    def score(self, color: Color) -> float:
        if self.outcome is None:
            raise ValueError('game has no settled outcome')
        return self.outcome.score(color)

    def is_valid(self) -> bool:
        return self.rated and self.time_control is not TimeControl.GARBAGE and self.outcome is not None

    def is_useful(self, time_control: TimeControl = TimeControl.BLITZ) -> bool:
        """valid and of the time control selected for rating"""
        return self.is_valid() and self.time_control is time_control


def _as_utc(value) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def records_from_frame(
    df: pl.DataFrame,
    white_col: str = 'white',
    black_col: str = 'black',
    result_col: str = 'result',
    datetime_col: str = 'timestamp',
    rated_col: Optional[str] = 'rated',
    time_control_col: Optional[str] = 'time_control',
    white_rating_col: Optional[str] = 'white_rating',
    black_rating_col: Optional[str] = 'black_rating',
) -> Iterator[GameRecord]:
    """
    Iterate a DataFrame of games as GameRecords, in row order.

    Optional columns may be set to None or left out of the frame, in which case the
    GameRecord defaults are used. Time controls are given by their enum value ('blitz').
    """
    columns = set(df.columns)
    for row in df.iter_rows(named=True):
        kwargs = {}
        if rated_col in columns:
            kwargs['rated'] = bool(row[rated_col])
        if time_control_col in columns:
            kwargs['time_control'] = TimeControl(row[time_control_col])
        if white_rating_col in columns:
            kwargs['white_reference_rating'] = int(row[white_rating_col])
        if black_rating_col in columns:
            kwargs['black_reference_rating'] = int(row[black_rating_col])
        yield GameRecord(
            white=str(row[white_col]),
            black=str(row[black_col]),
            outcome=Outcome.from_result(row[result_col]),
            timestamp=_as_utc(row[datetime_col]),
            **kwargs,
        )
