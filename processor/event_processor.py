"""Event processor for validating and normalizing raw event records."""
import hashlib
import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union

from processor.date_normalizer import normalize_date_range
from processor.models import EventSummary, RawEvent, SubEvent

logger = logging.getLogger(__name__)


class EventProcessor:
    """Processor turning loosely-typed event records into EventSummary objects."""

    def process_events(
        self,
        raw_events: Iterable[Union[RawEvent, Mapping]]
    ) -> List[EventSummary]:
        """
        Validate and normalize raw event records.

        Args:
            raw_events: RawEvent objects or store records
                ({id, college, eventName, location, dates, type,
                competition, createdAt, events})

        Returns:
            List of EventSummary objects with unique, non-empty ids
        """
        summaries = []
        seen_ids = set()
        total = 0

        for record in raw_events:
            total += 1
            try:
                raw_event = self._to_raw_event(record)
                if raw_event is None:
                    continue
                summary = self._process_single_event(raw_event)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Failed to process event record #{total}: {e}")
                continue

            if summary.event_id in seen_ids:
                logger.warning(
                    f"Duplicate event id '{summary.event_id}', skipping record"
                )
                continue

            seen_ids.add(summary.event_id)
            summaries.append(summary)

        logger.info(
            f"Processed {len(summaries)} valid events out of "
            f"{total} total records"
        )
        return summaries

    def _to_raw_event(self, record: Any) -> Optional[RawEvent]:
        """
        Coerce a store record into a RawEvent.

        Args:
            record: RawEvent or mapping in the store's shape

        Returns:
            RawEvent object or None if the record is not usable
        """
        if isinstance(record, RawEvent):
            return record

        if not isinstance(record, Mapping):
            logger.warning(
                f"Skipping event record of unexpected type "
                f"{type(record).__name__}"
            )
            return None

        sub_events = [
            SubEvent(
                name=self._text(sub.get('name')),
                type=self._text(sub.get('type'))
            )
            for sub in record.get('events') or []
            if isinstance(sub, Mapping)
        ]

        return RawEvent(
            id=self._text(record.get('id')) or None,
            college=self._text(record.get('college')),
            event_name=self._text(record.get('eventName')),
            location=self._text(record.get('location')),
            dates=self._text(record.get('dates')),
            type=self._text(record.get('type')),
            competition=self._text(record.get('competition')),
            created_at=self._created_at(record.get('createdAt')),
            sub_events=sub_events
        )

    def _process_single_event(self, event: RawEvent) -> EventSummary:
        """
        Normalize a single RawEvent.

        Args:
            event: RawEvent object

        Returns:
            EventSummary object
        """
        start_date, end_date = normalize_date_range(event.dates)

        event_id = event.id
        if not event_id:
            event_id = self.generate_event_id(
                college=event.college,
                name=event.event_name,
                dates=event.dates
            )
            logger.warning(
                f"Event '{event.event_name}' has no id, generated {event_id[:12]}"
            )

        sub_event_text = ' '.join(
            f"{sub.name} {sub.type}" for sub in event.sub_events
        )

        return EventSummary(
            event_id=event_id,
            college=event.college,
            name=event.event_name,
            city=event.location,
            start_date=start_date,
            end_date=end_date,
            event_type=event.type,
            competition_type=event.competition,
            created_at=self._created_at(event.created_at),
            sub_event_text=sub_event_text
        )

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ''
        return str(value).strip()

    @staticmethod
    def _created_at(value: Any) -> int:
        """Coerce a createdAt value to a non-negative integer, 0 if unusable."""
        if isinstance(value, bool):
            return 0
        try:
            created_at = int(value)
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(created_at, 0)

    def generate_event_id(self, college: str, name: str, dates: str) -> str:
        """
        Generate a stable identifier for an event record lacking one.

        Args:
            college: Hosting college
            name: Event name
            dates: Raw date text

        Returns:
            Event ID (SHA256 hash)
        """
        composite = f"{college}|{name}|{dates}"
        hash_obj = hashlib.sha256(composite.encode('utf-8'))
        return hash_obj.hexdigest()
