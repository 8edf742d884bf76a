"""
Date and time extraction for receipt lines.

Dates are normalized to ISO format (YYYY-MM-DD), times to HH:MM or HH:MM:SS.
"""

from typing import Optional
import logging
import re

from .patterns import PatternSpec

logger = logging.getLogger(__name__)


# Tried in order; first match wins.
DATE_PATTERNS = [
    PatternSpec(
        name='day_first_slash',
        pattern=r'\b(\d{1,2})/(\d{1,2})/(\d{4})\b',
        example='12/05/2024',
    ),
    PatternSpec(
        name='day_first_dash',
        pattern=r'\b(\d{1,2})-(\d{1,2})-(\d{4})\b',
        example='12-05-2024',
    ),
    PatternSpec(
        name='year_first_slash',
        pattern=r'\b(\d{4})/(\d{1,2})/(\d{1,2})\b',
        example='2024/05/12',
        notes='Year-first: groups are (year, month, day)',
    ),
    PatternSpec(
        name='iso_date',
        pattern=r'\b(\d{4})-(\d{1,2})-(\d{1,2})\b',
        example='2024-05-12',
        notes='Year-first: groups are (year, month, day)',
    ),
]

YEAR_FIRST = {'year_first_slash', 'iso_date'}

TIME_PATTERN = PatternSpec(
    name='clock_time',
    pattern=r'\b(\d{1,2}):(\d{2})(?::(\d{2}))?\b',
    example='21:05:19',
)


def extract_date(line: str) -> Optional[str]:
    """
    Extract a date from a single line.

    Args:
        line: Line of receipt text

    Returns:
        ISO date string (YYYY-MM-DD) or None

    Examples:
        >>> extract_date("Ngay: 12/05/2024")
        '2024-05-12'
        >>> extract_date("2024-5-2 10:15")
        '2024-05-02'
    """
    if not line:
        return None

    for spec in DATE_PATTERNS:
        match = spec.search(line)
        if not match:
            continue

        if spec.name in YEAR_FIRST:
            year, month, day = match.groups()
        else:
            day, month, year = match.groups()

        logger.debug("Date matched", extra={'pattern': spec.name, 'raw': match.group(0)})
        return f"{year}-{int(month):02d}-{int(day):02d}"

    return None


def extract_time(line: str) -> Optional[str]:
    """
    Extract a clock time from a single line.

    Examples:
        >>> extract_time("Gio: 21:05:19")
        '21:05:19'
        >>> extract_time("9:30 AM")
        '09:30'
    """
    if not line:
        return None

    match = TIME_PATTERN.search(line)
    if not match:
        return None

    hour, minute, second = match.groups()
    formatted = f"{int(hour):02d}:{minute}"
    if second is not None:
        formatted += f":{second}"
    return formatted
