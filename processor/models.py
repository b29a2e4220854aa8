"""Data models for event search and ranking."""
from dataclasses import dataclass, field, fields
from datetime import date
from enum import Enum
from typing import List, Optional


@dataclass
class SubEvent:
    """Nested sub-event of a festival."""
    name: str
    type: str


@dataclass
class RawEvent:
    """Event record as held by the upstream event store."""
    id: Optional[str]
    college: str
    event_name: str
    location: str
    dates: str
    type: str
    competition: str
    created_at: int = 0
    sub_events: List[SubEvent] = field(default_factory=list)


@dataclass(frozen=True)
class EventSummary:
    """Validated and normalized event, ready for ranking and search."""
    event_id: str
    college: str
    name: str
    city: str
    start_date: date
    end_date: date
    event_type: str
    competition_type: str
    created_at: int
    sub_event_text: str


class Category(Enum):
    """Position of an event relative to today."""
    CURRENT = 'current'
    UPCOMING = 'upcoming'
    PAST = 'past'


@dataclass(frozen=True)
class RankedEvent(EventSummary):
    """Event summary with its display category and sort key."""
    category: Category
    sort_key: int

    @classmethod
    def from_summary(
        cls,
        summary: EventSummary,
        category: Category,
        sort_key: int
    ) -> 'RankedEvent':
        values = {f.name: getattr(summary, f.name) for f in fields(EventSummary)}
        return cls(category=category, sort_key=sort_key, **values)


@dataclass
class QueryClassification:
    """Result of splitting a search query into date and text tokens."""
    date_tokens: List[str] = field(default_factory=list)
    text_tokens: List[str] = field(default_factory=list)
    day_only: Optional[int] = None
