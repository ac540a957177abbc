"""
Freshness filter parsing and validation.

A freshness filter is either a shortcut code (``pd``, ``pw``, ``pm``, ``py``
for past day, week, month and year) or an explicit date range written as
``YYYY-MM-DDtoYYYY-MM-DD``. Values are parsed once into a ``ParsedFreshness``
and only the date-range variant is checked against the calendar.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .models import SearchProvider

logger = logging.getLogger(__name__)

FRESHNESS_SHORTCUTS = frozenset({"pd", "pw", "pm", "py"})
FRESHNESS_SUPPORTED_PROVIDERS = frozenset({SearchProvider.BRAVE})

_DATE_RANGE_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})to([0-9]{4})-([0-9]{2})-([0-9]{2})"
)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

CalendarDate = Tuple[int, int, int]


class FreshnessKind(Enum):
    """Variants a freshness value can parse into."""
    SHORTCUT = "shortcut"
    DATE_RANGE = "date_range"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParsedFreshness:
    """
    Result of parsing a freshness value.

    Attributes:
        kind: Which variant the value parsed into
        value: Canonical token, None for invalid input
        start: (year, month, day) of a date range
        end: (year, month, day) of a date range
    """
    kind: FreshnessKind
    value: Optional[str] = None
    start: Optional[CalendarDate] = None
    end: Optional[CalendarDate] = None

    @property
    def is_valid(self) -> bool:
        return self.kind is not FreshnessKind.INVALID


_INVALID = ParsedFreshness(kind=FreshnessKind.INVALID)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, 1-based month."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def is_valid_date(year: int, month: int, day: int) -> bool:
    """Check a date field by field; no rollover into the next month."""
    if month < 1 or month > 12:
        return False
    return 1 <= day <= days_in_month(year, month)


def parse_freshness(value: Optional[str]) -> ParsedFreshness:
    """
    Parse a freshness value into a shortcut, a date range, or invalid.

    Shortcut codes are matched case-insensitively. Date ranges must use the
    lowercase ``to`` separator, contain real calendar dates, and not start
    after they end. A single-day range (start equal to end) is accepted.
    """
    if not isinstance(value, str):
        return _INVALID
    trimmed = value.strip()
    if not trimmed:
        return _INVALID

    lowered = trimmed.lower()
    if lowered in FRESHNESS_SHORTCUTS:
        return ParsedFreshness(kind=FreshnessKind.SHORTCUT, value=lowered)

    match = _DATE_RANGE_PATTERN.fullmatch(trimmed)
    if not match:
        return _INVALID

    fields = [int(group) for group in match.groups()]
    start = (fields[0], fields[1], fields[2])
    end = (fields[3], fields[4], fields[5])
    if not is_valid_date(*start) or not is_valid_date(*end):
        return _INVALID
    if start > end:
        return _INVALID

    return ParsedFreshness(kind=FreshnessKind.DATE_RANGE, value=trimmed, start=start, end=end)


def normalize_freshness(value: Optional[str]) -> Optional[str]:
    """
    Return the canonical freshness token, or None when the value is invalid.

    Never raises. Shortcuts come back lowercased, date ranges unchanged.
    """
    return parse_freshness(value).value


def resolve_freshness(
    provider: Union[SearchProvider, str],
    value: Optional[str]
) -> Optional[str]:
    """
    Decide which freshness token, if any, to forward to a provider.

    Returns None (so the caller omits the filter) when no value was given,
    the provider does not support freshness filtering, or the value is invalid.
    """
    if value is None:
        return None

    try:
        supported = SearchProvider(provider) in FRESHNESS_SUPPORTED_PROVIDERS
    except ValueError:
        supported = False
    if not supported:
        name = provider.value if isinstance(provider, SearchProvider) else provider
        logger.warning("Ignoring freshness %r: not supported by the %s provider", value, name)
        return None

    normalized = normalize_freshness(value)
    if normalized is None:
        logger.warning(
            "Ignoring freshness %r: expected one of pd, pw, pm, py or a range like YYYY-MM-DDtoYYYY-MM-DD",
            value
        )
    return normalized
