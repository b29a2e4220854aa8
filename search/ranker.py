"""Date-aware categorization and ordering of events."""
import calendar
import logging
from datetime import date, timedelta
from typing import Iterable, List

from processor.models import Category, EventSummary, RankedEvent

logger = logging.getLogger(__name__)

CATEGORY_ORDER = {
    Category.CURRENT: 0,
    Category.UPCOMING: 1,
    Category.PAST: 2
}


def _epoch(value: date) -> int:
    return calendar.timegm(value.timetuple())


def categorize(event: EventSummary, today: date) -> Category:
    """Place an event relative to today (current, upcoming or past)."""
    if event.start_date <= today <= event.end_date:
        return Category.CURRENT
    if today < event.start_date:
        return Category.UPCOMING
    return Category.PAST


class EventRanker:
    """Orders events as current, then upcoming, then recently past."""

    RETENTION_DAYS = 7

    def __init__(self, retention_days: int = RETENTION_DAYS):
        """
        Initialize the ranker.

        Args:
            retention_days: Days after its end date that a past event
                stays listed (default: 7)
        """
        self.retention_days = retention_days

    def rank(self, events: Iterable[EventSummary], today: date) -> List[RankedEvent]:
        """
        Drop stale events and order the rest for display.

        Current and upcoming events are ordered by start date (earliest
        first), past events by end date (most recently ended first).
        Ties go to the event created earlier.

        Args:
            events: Normalized events
            today: Reference date

        Returns:
            RankedEvent list: current block, upcoming block, past block
        """
        cutoff = today - timedelta(days=self.retention_days)
        ranked = []
        dropped = 0

        for event in events:
            if event.end_date < cutoff:
                dropped += 1
                continue

            category = categorize(event, today)
            if category is Category.PAST:
                sort_key = -_epoch(event.end_date)
            else:
                sort_key = _epoch(event.start_date)

            ranked.append(RankedEvent.from_summary(event, category, sort_key))

        ranked.sort(key=lambda e: (CATEGORY_ORDER[e.category], e.sort_key, e.created_at))

        logger.debug(
            f"Ranked {len(ranked)} events for {today.isoformat()}, "
            f"dropped {dropped} older than {self.retention_days} days"
        )
        return ranked
