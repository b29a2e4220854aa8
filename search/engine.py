"""Search engine combining ranking, date filters and fuzzy text matching."""
import logging
from datetime import date
from typing import Iterable, List, Optional

from processor.date_format import DEFAULT_LOCALE, format_friendly_range
from processor.models import EventSummary, QueryClassification, RankedEvent
from search.date_tokens import date_in_range, day_in_event_days, parse_date_token
from search.fuzzy_matcher import token_matches_haystack
from search.query_classifier import classify_query
from search.ranker import EventRanker

logger = logging.getLogger(__name__)


def build_haystack(event: EventSummary, locale: str = DEFAULT_LOCALE) -> str:
    """
    Build the lowercased searchable text of an event.

    Joins college, name, city, the friendly date range, event type,
    competition type and the sub-event names and types.
    """
    parts = [
        event.college,
        event.name,
        event.city,
        format_friendly_range(event.start_date, event.end_date, locale),
        event.event_type,
        event.competition_type,
        event.sub_event_text
    ]
    return ' '.join(parts).lower()


class SearchEngine:
    """Filters the ranked event list by a free-text query."""

    def __init__(self, ranker: Optional[EventRanker] = None, locale: str = DEFAULT_LOCALE):
        """
        Initialize the search engine.

        Args:
            ranker: EventRanker used for the base list (default: 7-day retention)
            locale: Language tag for the date text included in the haystack
        """
        self.ranker = ranker or EventRanker()
        self.locale = locale

    def search(
        self,
        events: Iterable[EventSummary],
        query: str,
        today: date
    ) -> List[RankedEvent]:
        """
        Return the ranked events matching a query, in display order.

        Args:
            events: Normalized events
            query: Raw search input
            today: Reference date

        Returns:
            Matching RankedEvent objects in the ranker's order
        """
        ranked = self.ranker.rank(events, today)

        if not (query or '').strip():
            return ranked

        classification = classify_query(query)

        if classification.day_only is not None:
            day = classification.day_only
            results = [event for event in ranked if day_in_event_days(day, event)]
            logger.debug(
                f"Day-only query '{query}' (day {day}) matched "
                f"{len(results)} of {len(ranked)} events"
            )
            return results

        results = [
            event for event in ranked
            if self._matches(event, classification, today)
        ]
        logger.debug(
            f"Query '{query}' matched {len(results)} of {len(ranked)} events "
            f"(date tokens: {classification.date_tokens}, "
            f"text tokens: {classification.text_tokens})"
        )
        return results

    def _matches(
        self,
        event: EventSummary,
        classification: QueryClassification,
        today: date
    ) -> bool:
        """Check an event against every date token, then every text token."""
        for token in classification.date_tokens:
            parsed = parse_date_token(token, today)
            if parsed is None:
                return False
            if not date_in_range(parsed, event.start_date, event.end_date):
                return False

        if not classification.text_tokens:
            return True

        haystack = build_haystack(event, self.locale)
        return all(
            token_matches_haystack(token, haystack)
            for token in classification.text_tokens
        )
