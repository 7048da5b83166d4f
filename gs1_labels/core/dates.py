"""
Flexible date parsing for label batch files.

Batch files come from heterogeneous spreadsheet exports, so a date cell can
hold an ISO date, a US or European date, a year-month, a spreadsheet serial
number or something else entirely. Parsing is an ordered chain of attempts;
the first one that succeeds wins:

    0. strip a trailing time of day ("2025-06-05 00:00:00", "...T10:30Z")
    1. day-zero     YYYY-MM-00  -> first of month, flagged as day-zero
    2. explicit     yyyy-MM-dd, yyyy-M-d, yyyy/MM/dd, yyyy/M/d, yyyyMMdd,
                    yyyy-MM, yyyyMM, MM/dd/yyyy, M/d/yyyy, dd/MM/yyyy, d/M/yyyy
    3. serial       spreadsheet day number (1900 date system)
    4. generic      dateutil parser, month-first

Month-first formats sit ahead of day-first ones, so "06/05/2025" is the
5th of June. The order is part of the contract and is exposed as
DATE_FORMAT_CHAIN.
"""

from __future__ import annotations

import re
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Tuple, Union

from dateutil import parser as dateutil_parser


@dataclass(frozen=True)
class ParsedDate:
    """
    Result of a successful flexible parse.

    Attributes:
        value: Calendar date (first of month for day-zero and year-month input)
        day_zero: True when the input was YYYY-MM-00
        source_format: Name of the chain step that matched
    """
    value: date
    day_zero: bool = False
    source_format: str = ""


# Spreadsheet serial dates count days from 1899-12-30 (this absorbs the
# 1900 leap-year quirk for every serial from March 1900 on).
SPREADSHEET_EPOCH = date(1899, 12, 30)
MAX_SPREADSHEET_SERIAL = 2958465  # 9999-12-31

_CLOCK_PATTERN = re.compile(
    r'^\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?'
    r'(\s*[AaPp][Mm])?'
    r'(\s*(Z|[+-]\d{2}:?\d{2}))?$'
)

_DAY_ZERO_PATTERN = re.compile(r'^(\d{4})-(\d{2})-00$')

_SERIAL_PATTERN = re.compile(r'^\d+(\.\d+)?$')

# (name, pattern); groups are always y, m and optionally d
_EXPLICIT_FORMATS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("yyyy-MM-dd", re.compile(r'^(?P<y>\d{4})-(?P<m>\d{2})-(?P<d>\d{2})$')),
    ("yyyy-M-d", re.compile(r'^(?P<y>\d{4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})$')),
    ("yyyy/MM/dd", re.compile(r'^(?P<y>\d{4})/(?P<m>\d{2})/(?P<d>\d{2})$')),
    ("yyyy/M/d", re.compile(r'^(?P<y>\d{4})/(?P<m>\d{1,2})/(?P<d>\d{1,2})$')),
    ("yyyyMMdd", re.compile(r'^(?P<y>\d{4})(?P<m>\d{2})(?P<d>\d{2})$')),
    ("yyyy-MM", re.compile(r'^(?P<y>\d{4})-(?P<m>\d{2})$')),
    ("yyyyMM", re.compile(r'^(?P<y>\d{4})(?P<m>\d{2})$')),
    ("MM/dd/yyyy", re.compile(r'^(?P<m>\d{2})/(?P<d>\d{2})/(?P<y>\d{4})$')),
    ("M/d/yyyy", re.compile(r'^(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<y>\d{4})$')),
    ("dd/MM/yyyy", re.compile(r'^(?P<d>\d{2})/(?P<m>\d{2})/(?P<y>\d{4})$')),
    ("d/M/yyyy", re.compile(r'^(?P<d>\d{1,2})/(?P<m>\d{1,2})/(?P<y>\d{4})$')),
)

DATE_FORMAT_CHAIN: Tuple[str, ...] = (
    ("yyyy-MM-00",)
    + tuple(name for name, _ in _EXPLICIT_FORMATS)
    + ("serial", "generic")
)


def last_day_of_month(year: int, month: int) -> int:
    """Number of the last day in a month, leap years included."""
    return monthrange(year, month)[1]


def end_of_month(value: date) -> date:
    """Last calendar day of the month containing value."""
    return value.replace(day=last_day_of_month(value.year, value.month))


def strip_time_component(text: str) -> str:
    """
    Drop a trailing time of day from a date string.

    The split happens at the first space or 'T', and only when what follows
    looks like a clock time; otherwise the text is returned unchanged.
    """
    positions = [pos for pos in (text.find(" "), text.find("T")) if pos > 0]
    if not positions:
        return text
    split_at = min(positions)
    remainder = text[split_at + 1:].strip()
    if _CLOCK_PATTERN.match(remainder):
        return text[:split_at].strip()
    return text


def from_spreadsheet_serial(value: Union[str, float, int]) -> Optional[date]:
    """
    Convert a spreadsheet serial day number to a date.

    The fractional (time of day) part is dropped. Returns None for values
    outside the range spreadsheets can represent.
    """
    try:
        serial = float(value)
    except (TypeError, ValueError):
        return None
    if serial != serial or serial < 1 or serial > MAX_SPREADSHEET_SERIAL:
        return None
    return SPREADSHEET_EPOCH + timedelta(days=int(serial))


def _try_day_zero(text: str) -> Optional[ParsedDate]:
    match = _DAY_ZERO_PATTERN.match(text)
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return ParsedDate(date(year, month, 1), day_zero=True, source_format="yyyy-MM-00")


def _try_explicit(text: str) -> Optional[ParsedDate]:
    for name, pattern in _EXPLICIT_FORMATS:
        match = pattern.match(text)
        if not match:
            continue
        parts = match.groupdict()
        try:
            value = date(int(parts["y"]), int(parts["m"]), int(parts.get("d") or 1))
        except ValueError:
            # e.g. 13/01/2025 is not MM/dd, let a later format try
            continue
        return ParsedDate(value, source_format=name)
    return None


def _try_serial(text: str) -> Optional[ParsedDate]:
    if not _SERIAL_PATTERN.match(text):
        return None
    value = from_spreadsheet_serial(text)
    if value is None:
        return None
    return ParsedDate(value, source_format="serial")


def _try_generic(text: str) -> Optional[ParsedDate]:
    try:
        parsed = dateutil_parser.parse(
            text,
            dayfirst=False,
            default=datetime(1900, 1, 1),
        )
    except (ValueError, OverflowError):
        return None
    return ParsedDate(parsed.date(), source_format="generic")


_PARSE_CHAIN: List[Callable[[str], Optional[ParsedDate]]] = [
    _try_day_zero,
    _try_explicit,
    _try_serial,
    _try_generic,
]


def parse_flexible_date(text: Optional[str]) -> Optional[ParsedDate]:
    """
    Parse a free-form date string.

    Args:
        text: Raw cell value

    Returns:
        ParsedDate on success, None if no step of the chain matched
    """
    if text is None:
        return None
    candidate = strip_time_component(str(text).strip())
    if not candidate:
        return None

    for attempt in _PARSE_CHAIN:
        result = attempt(candidate)
        if result is not None:
            return result
    return None
