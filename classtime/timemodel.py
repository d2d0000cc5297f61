from datetime import datetime
from typing import Union

from .errors import InvalidTimeRange

MINUTES_PER_DAY = 24 * 60

TimeLike = Union[str, int]


def parse_time(value: TimeLike) -> int:
    """Return minutes after midnight for an ``HH:MM`` string (ints pass through)."""
    if isinstance(value, bool):
        raise InvalidTimeRange(f"Not a time of day: {value!r}")
    if isinstance(value, int):
        minutes = value
    else:
        try:
            t = datetime.strptime(str(value).strip(), "%H:%M")
        except ValueError:
            raise InvalidTimeRange(f"Not a time of day: {value!r}") from None
        minutes = t.hour * 60 + t.minute
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeRange(f"Time {value!r} is outside a single day")
    return minutes


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_range(start: int, end: int) -> str:
    return f"{format_time(start)} - {format_time(end)}"


def add_minutes(start: int, minutes: int) -> int:
    """Shift a time of day forward; rolling past midnight is an error."""
    if minutes <= 0:
        raise InvalidTimeRange(f"Duration must be positive, got {minutes}")
    end = start + minutes
    if end >= MINUTES_PER_DAY:
        raise InvalidTimeRange(
            f"{format_time(start)} + {minutes} min crosses midnight"
        )
    return end


def duration(start: int, end: int) -> int:
    if end <= start:
        raise InvalidTimeRange(f"Empty or negative range {format_time(start)}-{format_time(end)}")
    return end - start


def overlaps(s1: int, e1: int, s2: int, e2: int) -> bool:
    # half-open: back-to-back intervals do not overlap
    return s1 < e2 and s2 < e1
