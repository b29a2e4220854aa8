"""Parsing of date-like search tokens and date filters."""
import logging
import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser

from processor.models import EventSummary

logger = logging.getLogger(__name__)

SLASH_DATE = re.compile(
    r'^(\d{1,2})(?:st|nd|rd|th)?/(\d{1,2})/(\d{4}|\d{2})$',
    re.IGNORECASE
)
DAY_ONLY = re.compile(r'^(\d{1,2})(?:st|nd|rd|th)?$', re.IGNORECASE)
ORDINAL_SUFFIX = re.compile(r'(\d+)(?:st|nd|rd|th)', re.IGNORECASE)
WORD_SPLIT = re.compile(r'[\s,./-]+')

PARSER_INFO = date_parser.parserinfo()


def _expand_year(year_str: str) -> int:
    year = int(year_str)
    if len(year_str) == 2:
        year += 2000 if year <= 79 else 1900
    return year


def _names_calendar_date(text: str) -> bool:
    """
    Check that text carries a number or a month name.

    A bare weekday ("fri", "monday") would otherwise resolve to a weekday
    relative to the default date.
    """
    if any(char.isdigit() for char in text):
        return True
    return any(
        PARSER_INFO.month(word) is not None
        for word in WORD_SPLIT.split(text)
        if word
    )


def parse_date_token(token: str, today: date) -> Optional[date]:
    """
    Turn a search token into a calendar date.

    Accepts "13/12/25", "13th/12/2025" and natural forms such as
    "25 Nov", "Nov 25" or "25th Nov 2025". Components the token leaves
    out are taken from January 1st of today's year.

    Args:
        token: Search token
        today: Reference date for missing components

    Returns:
        Parsed date, or None if the token is not a date
    """
    slash_match = SLASH_DATE.match(token)
    if slash_match:
        day, month, year = slash_match.groups()
        try:
            return date(_expand_year(year), int(month), int(day))
        except ValueError:
            return None

    natural = ORDINAL_SUFFIX.sub(r'\1', token, count=1)
    if not _names_calendar_date(natural):
        logger.debug(f"Token '{token}' names no day, month or year")
        return None

    try:
        parsed = date_parser.parse(natural, default=datetime(today.year, 1, 1))
    except (ValueError, OverflowError):
        logger.debug(f"Token '{token}' is not a date")
        return None
    return parsed.date()


def date_in_range(value: date, start: date, end: date) -> bool:
    """Inclusive calendar-day range check."""
    return start <= value <= end


def day_only_value(token: str) -> Optional[int]:
    """
    Day-of-month number of a bare "12" or "12th" token.

    Returns:
        Day number, or None if the token is not a bare day
    """
    match = DAY_ONLY.match(token)
    if match:
        return int(match.group(1))
    return None


def day_in_event_days(day: int, event: EventSummary) -> bool:
    """
    Check a day-of-month number against an event's start and end days.

    Only the day numbers are compared; months and years are ignored, so
    day 12 matches an event on 12-13 March as well as one on 12-13 December.
    An event crossing a month boundary (30 Nov - 2 Dec) matches no day.
    """
    return event.start_date.day <= day <= event.end_date.day
