"""Normalization of festival date-range text into calendar dates."""
import logging
import re
from datetime import date
from typing import Tuple

logger = logging.getLogger(__name__)

FALLBACK_DATE = date(2025, 1, 1)

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12
}

# "25th to 26th Nov 25"
RANGE_PATTERN = re.compile(
    r'(\d{1,2})(?:st|nd|rd|th)?\s+to\s+(\d{1,2})(?:st|nd|rd|th)?'
    r'\s+([a-z]+)\.?\s+(\d{4}|\d{2})\b',
    re.IGNORECASE
)

# "24th Dec 25"
SINGLE_PATTERN = re.compile(
    r'(\d{1,2})(?:st|nd|rd|th)?\s+([a-z]+)\.?\s+(\d{4}|\d{2})\b',
    re.IGNORECASE
)


def month_number(month_str: str) -> int:
    """
    Resolve a month name to its number using its first three letters.

    Args:
        month_str: Month name or abbreviation (any case)

    Returns:
        Month number 1-12, or 1 when the name is not recognized
    """
    return MONTHS.get(month_str[:3].lower(), 1)


def _expand_year(year_str: str) -> int:
    year = int(year_str)
    if len(year_str) == 2:
        year += 2000
    return year


def normalize_date_range(date_text: str) -> Tuple[date, date]:
    """
    Convert date-range text into an inclusive (start, end) pair.

    Handles "25th to 26th Nov 25" and "24th Dec 25". Text that matches
    neither pattern, or names a day the month does not have, maps both
    ends to FALLBACK_DATE. An end day before the start day collapses
    the range to the start date.

    Args:
        date_text: Human-readable date text from the event record

    Returns:
        Tuple of (start_date, end_date) with start_date <= end_date
    """
    text = date_text or ''

    try:
        range_match = RANGE_PATTERN.search(text)
        if range_match:
            start_day, end_day, month, year = range_match.groups()
            month_num = month_number(month)
            full_year = _expand_year(year)
            start = date(full_year, month_num, int(start_day))
            end = date(full_year, month_num, int(end_day))
            if end < start:
                logger.warning(
                    f"Date range '{text}' ends before it starts; "
                    f"using start date only"
                )
                end = start
            return start, end

        single_match = SINGLE_PATTERN.search(text)
        if single_match:
            day, month, year = single_match.groups()
            single = date(_expand_year(year), month_number(month), int(day))
            return single, single
    except ValueError as e:
        logger.warning(f"Invalid calendar date in '{text}': {e}")
        return FALLBACK_DATE, FALLBACK_DATE

    logger.debug(f"Unrecognized date text '{text}', using fallback date")
    return FALLBACK_DATE, FALLBACK_DATE
