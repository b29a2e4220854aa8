"""Locale-aware, human-friendly rendering of event date ranges."""
from datetime import date

DEFAULT_LOCALE = 'en-US'

MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'
)

# Locales that put the month before the day ("Dec 12, 2025")
MONTH_FIRST_LOCALES = {'en-us', 'en-ca', 'en-ph'}


def _month_first(locale: str) -> bool:
    return (locale or DEFAULT_LOCALE).replace('_', '-').lower() in MONTH_FIRST_LOCALES


def _day_month(value: date, locale: str) -> str:
    month = MONTH_ABBREVIATIONS[value.month - 1]
    if _month_first(locale):
        return f"{month} {value.day}"
    return f"{value.day} {month}"


def format_date(value: date, locale: str = DEFAULT_LOCALE) -> str:
    """Format a single date, e.g. "Dec 12, 2025" or "12 Dec 2025"."""
    if _month_first(locale):
        return f"{_day_month(value, locale)}, {value.year}"
    return f"{_day_month(value, locale)} {value.year}"


def format_friendly_range(start: date, end: date, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format an inclusive date range as compactly as its endpoints allow.

    Args:
        start: First day of the range
        end: Last day of the range
        locale: Language tag controlling day/month order

    Returns:
        "12 Dec 2025", "12–13 Dec 2025", "30 Nov – 2 Dec 2025" or
        "30 Dec 2025 – 2 Jan 2026" (month-first locales reorder each date)
    """
    if start == end:
        return format_date(start, locale)

    if start.year == end.year and start.month == end.month:
        month = MONTH_ABBREVIATIONS[start.month - 1]
        return f"{start.day}–{end.day} {month} {start.year}"

    if start.year == end.year:
        return f"{_day_month(start, locale)} – {format_date(end, locale)}"

    return f"{format_date(start, locale)} – {format_date(end, locale)}"
