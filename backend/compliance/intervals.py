"""Resolution of schedule records into absolute shift intervals."""

import re
from datetime import datetime, time, timedelta
from typing import Optional

from .dates import parse_date_key
from .types import Assignment, ShiftInterval

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")


def parse_time_of_day(value) -> Optional[time]:
    """Parse "HH:MM" (or "HH:MM:SS"), returning None when malformed."""
    if not isinstance(value, str):
        return None
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hour, minute, second = match.groups()
    return time(int(hour), int(minute), int(second or 0))


def time_span_hours(start_time: str, end_time: str) -> Optional[float]:
    """Hours from start to end time of day, wrapping past midnight."""
    start = parse_time_of_day(start_time)
    end = parse_time_of_day(end_time)
    if start is None or end is None:
        return None
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    diff = end_minutes - start_minutes
    if diff <= 0:
        diff += 24 * 60
    return round(diff / 60, 2)


def resolve_interval(record: Optional[Assignment], date_key: str) -> Optional[ShiftInterval]:
    """
    Compute the absolute interval of a worked shift anchored on a day.

    Leave and absent records have no interval. A shift whose end time is
    not after its start time runs overnight and ends on the following day.

    Args:
        record: The schedule record for the day
        date_key: ISO date key of the day the shift starts on

    Returns:
        ShiftInterval, or None when there is nothing to resolve or the date
        or times cannot be parsed
    """
    if record is None or record.is_leave:
        return None

    day = parse_date_key(date_key)
    start_str, end_str = record.resolved_times()
    start_t = parse_time_of_day(start_str)
    end_t = parse_time_of_day(end_str)
    if day is None or start_t is None or end_t is None:
        return None

    start = datetime.combine(day, start_t)
    end = datetime.combine(day, end_t)
    if end_t <= start_t:
        end += timedelta(days=1)

    return ShiftInterval(start=start, end=end)
