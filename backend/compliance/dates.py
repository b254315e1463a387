"""Calendar helpers: day sequences, quarter boundaries and date keys."""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from .types import DayInfo


def to_date_key(day: date) -> str:
    """Format a date as an ISO date key ("YYYY-MM-DD")."""
    return day.isoformat()


def parse_date_key(date_key) -> Optional[date]:
    """Parse an ISO date key, returning None when it is malformed."""
    if not isinstance(date_key, str):
        return None
    try:
        return date.fromisoformat(date_key)
    except ValueError:
        return None


def format_date_dmy(date_key) -> str:
    """Render a date key as DD-MM-YYYY for messages."""
    if not date_key or not isinstance(date_key, str):
        return "??-??-????"
    parts = date_key.split("-")
    if len(parts) != 3:
        return date_key
    year, month, day = parts
    return f"{day}-{month}-{year}"


def coerce_date(value) -> date:
    """
    Turn a date, datetime or date string into a date.

    Strings go through dateutil, so "2024-03-15", "15 March 2024" and full
    ISO timestamps are all accepted.

    Raises:
        ValueError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid date: {value!r}") from e
    raise ValueError(f"Invalid date: {value!r}")


def _day_info(day: date) -> DayInfo:
    weekday = day.weekday()
    return DayInfo(
        date_key=to_date_key(day),
        date=day,
        day_num=day.day,
        is_sunday=weekday == 6,
        is_saturday=weekday == 5,
    )


def days_of_range(start: date, end: date) -> Iterator[DayInfo]:
    """Yield every day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield _day_info(current)
        current += timedelta(days=1)


def month_range(day: date) -> tuple[date, date]:
    """First and last day of the month containing the given date."""
    start = day.replace(day=1)
    return start, start + relativedelta(months=1, days=-1)


def days_of_month(day: date) -> Iterator[DayInfo]:
    """Yield every day of the month containing the given date."""
    return days_of_range(*month_range(day))


def quarter_range(day: date) -> tuple[date, date]:
    """First and last day of the calendar quarter containing the given date."""
    start = date(day.year, (day.month - 1) // 3 * 3 + 1, 1)
    return start, start + relativedelta(months=3, days=-1)


def is_last_month_of_quarter(day: date) -> bool:
    """True for March, June, September and December."""
    return day.month % 3 == 0
