"""
Date normalization.

Source conventions:
- DD/MM   day first, separated by "/", "-" or "."
- MM/DD   month first, same separators
- DD MMM  "15 Jan 2023" (3-letter month, 4-digit year)
- auto    pick one of the above per value

Every parsed date is rendered as US_DATE (MM/DD/YYYY), UK_DATE (DD/MM/YYYY)
and ISO_DATE (YYYY-MM-DD). Day and month are range-checked only, so
"31/02/2023" is accepted.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, NamedTuple, Optional

from .rules import (
    AUTO,
    DATE_SAMPLE_SIZE,
    DATE_TARGETS,
    DD_MM,
    DD_MMM,
    ISO_DATE,
    MM_DD,
    UK_DATE,
    US_DATE,
)

DD_MMM_PATTERN = re.compile(r"^([0-9]{1,2})\s+([A-Za-z]{3})\s+([0-9]{4})$")
NUMERIC_DATE_PATTERN = re.compile(r"^([0-9]{1,2})[./-]([0-9]{1,2})[./-]([0-9]{2,4})$")
SEPARATORS = ("/", "-", ".")

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

EXAMPLES = {
    DD_MM: "31/12/2023",
    MM_DD: "12/31/2023",
    DD_MMM: "31 Dec 2023",
}


class CalendarDate(NamedTuple):
    day: int
    month: int
    year: int


def _in_range(day: int, month: int) -> bool:
    return 1 <= day <= 31 and 1 <= month <= 12


def _parse_day_month_name(value: str) -> Optional[CalendarDate]:
    match = DD_MMM_PATTERN.match(value)
    if not match:
        return None
    month = MONTHS.get(match.group(2).lower())
    if month is None:
        return None
    day, year = int(match.group(1)), int(match.group(3))
    if not _in_range(day, month) or year == 0:
        return None
    return CalendarDate(day, month, year)


def _to_int(part: str) -> Optional[int]:
    part = part.strip()
    if not (part.isascii() and part.isdigit()):
        return None
    try:
        return int(part)
    except ValueError:
        # beyond the interpreter's integer string conversion limit
        return None


def parse_date(value: Optional[str], source_format: str) -> Optional[CalendarDate]:
    """Parse ``value`` under ``source_format``; None when it cannot be read."""
    if not value:
        return None

    clean = value.strip()

    if source_format == DD_MMM or (source_format == AUTO and DD_MMM_PATTERN.match(clean)):
        return _parse_day_month_name(clean)

    separator = next((sep for sep in SEPARATORS if sep in clean), None)
    if separator is None:
        return None

    parts = clean.split(separator)
    if len(parts) != 3:
        return None

    first, second, year = (_to_int(p) for p in parts)
    if first is None or second is None or year is None:
        return None

    if source_format == DD_MM or (source_format == AUTO and first > 12):
        day, month = first, second
    else:
        month, day = first, second

    if year < 100:
        year += 2000 if year < 50 else 1900

    if not _in_range(day, month):
        return None

    return CalendarDate(day, month, year)


def format_date(date: Optional[CalendarDate], target_format: str) -> str:
    if date is None:
        return ""

    day = f"{date.day:02d}"
    month = f"{date.month:02d}"

    if target_format == US_DATE:
        return f"{month}/{day}/{date.year}"
    if target_format == UK_DATE:
        return f"{day}/{month}/{date.year}"
    if target_format == ISO_DATE:
        return f"{date.year}-{month}-{day}"
    return ""


def convert_date(value: Optional[str], source_format: str, target_format: str) -> str:
    return format_date(parse_date(value, source_format), target_format)


def standardize_date_formats(value: Optional[str], source_format: str) -> Dict[str, str]:
    """Render ``value`` in all three output formats (all blank if unparseable)."""
    parsed = parse_date(value, source_format)
    return {target: format_date(parsed, target) for target in DATE_TARGETS}


def detect_date_format(values: Iterable[str]) -> str:
    """
    Infer the dominant source convention from a sample of values.

    Rules:
    - Only the first 20 non-empty values are looked at.
    - Any "15 Jan 2023"-shaped value wins outright.
    - A first component above 12 means DD/MM, a second above 12 means MM/DD.
    - Ambiguous numeric samples default to MM/DD; nothing recognisable is auto.
    """
    sample = []
    for value in values:
        if value:
            sample.append(value.strip())
            if len(sample) == DATE_SAMPLE_SIZE:
                break

    if not sample:
        return AUTO

    if any(DD_MMM_PATTERN.match(value) for value in sample):
        return DD_MMM

    matches = [m for m in (NUMERIC_DATE_PATTERN.match(value) for value in sample) if m]
    if not matches:
        return AUTO

    if any(int(m.group(1)) > 12 for m in matches):
        return DD_MM
    if any(int(m.group(2)) > 12 for m in matches):
        return MM_DD
    return MM_DD


def date_format_example(source_format: str) -> str:
    return EXAMPLES.get(source_format, "Auto-detect")
