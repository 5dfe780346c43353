"""
Month key helpers.

A month key is a ``YYYY-MM`` string. Everything that accepts one validates
it here and raises ``InvalidArgumentError`` when it is malformed.
"""
import calendar
import re
from datetime import date, datetime
from typing import List

from dateutil.relativedelta import relativedelta

from app.core.exceptions import InvalidArgumentError

MONTH_KEY_PATTERN = r"^\d{4}-\d{2}$"

_MONTH_KEY_RE = re.compile(MONTH_KEY_PATTERN)


def parse_month(month: str) -> date:
    """Return the first day of the month named by ``month``."""
    if not isinstance(month, str) or not _MONTH_KEY_RE.match(month):
        raise InvalidArgumentError(f"Invalid month '{month}'. Use YYYY-MM.")
    year, month_number = int(month[:4]), int(month[5:7])
    if not 1 <= month_number <= 12 or year < 1:
        raise InvalidArgumentError(f"Invalid month '{month}'. Use YYYY-MM.")
    return date(year, month_number, 1)


def parse_day(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` calendar day."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid date '{value}'. Use YYYY-MM-DD.")


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_start(month: str) -> date:
    return parse_month(month)


def month_end(month: str) -> date:
    first = parse_month(month)
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first.replace(day=last_day)


def shift_month(month: str, offset: int) -> str:
    """Move ``offset`` months forward (negative for backwards)."""
    try:
        return month_key(parse_month(month) + relativedelta(months=offset))
    except (ValueError, OverflowError):
        raise InvalidArgumentError(f"Month '{month}' shifted by {offset} is out of range")


def previous_month(month: str) -> str:
    return shift_month(month, -1)


def month_window(end_month: str, count: int) -> List[str]:
    """The ``count`` consecutive month keys ending at ``end_month``, ascending."""
    if count <= 0:
        # Still validate the key so a bad month is reported rather than ignored
        parse_month(end_month)
        return []
    return [shift_month(end_month, offset) for offset in range(-(count - 1), 1)]
