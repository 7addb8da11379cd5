import re
from datetime import datetime

PROG = re.compile(r'(\d+(?:\.\d+)?)([WwDdHhMmSs])')
SECONDS_PER_UNIT = {
    'W': 7 * 24 * 60 * 60,    # weeks to seconds
    'D': 24 * 60 * 60,        # days to seconds
    'H': 60 * 60,             # hours to seconds
    'M': 60,                  # minutes to seconds
    'S': 1                    # seconds
}
SECONDS_PER_DAY = SECONDS_PER_UNIT['D']


def get_duration(duration_str):
    """
    Parse duration strings like '7D', '1W', '4.665D' etc. into a number of seconds

    Parameters:
    -----------
    duration_str : str
        String in format numberLetter where Letter is one of:
        W/w - weeks
        D/d - days
        H/h - hours
        M/m - minutes
        S/s - seconds

    Returns:
    --------
    duration : float
    """
    match = PROG.fullmatch(duration_str)
    if not match:
        raise ValueError(f"Invalid duration format: {duration_str}")
    number = float(match.group(1))
    unit = match.group(2).upper()
    return number * SECONDS_PER_UNIT[unit]


def duration_days(duration) -> float:
    """accept either a number of days or a duration string"""
    if isinstance(duration, str):
        return get_duration(duration) / SECONDS_PER_DAY
    return float(duration)


def days_between(old: datetime, now: datetime) -> float:
    """fractional days elapsed from old to now, whole seconds only"""
    seconds = int((now - old).total_seconds())
    return seconds / SECONDS_PER_DAY
