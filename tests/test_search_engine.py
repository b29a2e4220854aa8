"""Unit tests for SearchEngine."""
from dataclasses import replace
from datetime import date

import pytest

from processor.event_processor import EventProcessor
from search.engine import SearchEngine, build_haystack
from search.ranker import EventRanker

TODAY = date(2025, 12, 10)


@pytest.fixture
def events():
    """Create normalized events from store records."""
    records = [
        {
            'id': 'pandu',
            'college': 'Pandurang College',
            'eventName': 'Pandu Fest',
            'location': 'Mumbai, Vile Parle',
            'dates': '12th to 13th Dec 25',
            'type': 'Mixed',
            'competition': 'Intra-Collegiate',
            'createdAt': 1704063600000,
            'events': [
                {'name': 'Event 1', 'type': 'Dancing'},
                {'name': 'Event 2', 'type': 'Singing'}
            ]
        },
        {
            'id': 'kaiso',
            'college': 'Sindhu College',
            'eventName': 'Kaiso',
            'location': 'Mumbai, Mira Road',
            'dates': '15th to 17th Dec 25',
            'type': 'Mixed',
            'competition': 'Inter-Collegiate',
            'createdAt': 1704150000000
        },
        {
            'id': 'aitran',
            'college': 'IIT Bombay',
            'eventName': 'Aitran',
            'location': 'Mumbai, Powai',
            'dates': '10th to 11th Dec 25',
            'type': 'Technical',
            'competition': 'Inter-Collegiate',
            'createdAt': 1704400000000
        },
        {
            'id': 'saman',
            'college': 'Saman College',
            'eventName': 'Saman',
            'location': 'Pune',
            'dates': '8th to 9th Dec 25',
            'type': 'Cultural',
            'competition': 'Intra-Collegiate',
            'createdAt': 1704500000000
        },
        {
            'id': 'spring',
            'college': 'Vidya College',
            'eventName': 'Spring Fest',
            'location': 'Nashik',
            'dates': '11th to 14th Mar 26',
            'type': 'Sports',
            'competition': 'Inter-Collegiate',
            'createdAt': 1704600000000
        },
        {
            'id': 'stale',
            'college': 'Old College',
            'eventName': 'Stale Fest',
            'location': 'Mumbai',
            'dates': '1st to 2nd Dec 25',
            'type': 'Mixed',
            'competition': 'Inter-Collegiate',
            'createdAt': 1704700000000
        }
    ]
    return EventProcessor().process_events(records)


@pytest.fixture
def engine():
    """Create a SearchEngine with default settings."""
    return SearchEngine()


def ids(results):
    return [event.event_id for event in results]


class TestSearchEngine:
    """Test cases for SearchEngine.search."""

    def test_blank_query_returns_ranked_list(self, engine, events):
        """Test a blank query passes the ranked base list through."""
        expected = EventRanker().rank(events, TODAY)

        assert engine.search(events, '', TODAY) == expected
        assert engine.search(events, '   ', TODAY) == expected
        assert engine.search(events, None, TODAY) == expected
        assert ids(expected) == ['aitran', 'pandu', 'kaiso', 'spring', 'saman']

    def test_search_is_idempotent(self, engine, events):
        """Test repeated calls return equal results."""
        first = engine.search(events, 'kaizo1', TODAY)
        second = engine.search(events, 'kaizo1', TODAY)

        assert first == second
        assert ids(first) == ['kaiso']

    def test_empty_collection(self, engine):
        """Test searching no events."""
        assert engine.search([], 'pandu-fest', TODAY) == []
        assert engine.search([], '', TODAY) == []

    def test_day_only_ignores_other_tokens(self, engine, events):
        """Test "12 Dancing" filters by day 12 only, in ranked order."""
        results = engine.search(events, '12 Dancing', TODAY)

        assert ids(results) == ['pandu', 'spring']

    def test_day_only_matches_day_number_in_any_month(self, engine, events):
        """Test the day filter compares day numbers without months."""
        results = engine.search(events, '13th', TODAY)

        assert 'spring' in ids(results)
        assert 'pandu' in ids(results)

    def test_slash_date_in_range(self, engine, events):
        """Test a slash date inside an event's range."""
        assert ids(engine.search(events, '13/12/25', TODAY)) == ['pandu']

    def test_slash_date_outside_range(self, engine, events):
        """Test a slash date no event covers."""
        assert 'pandu' not in ids(engine.search(events, '14/12/25', TODAY))
        assert ids(engine.search(events, '14/12/25', TODAY)) == []

    def test_date_tokens_are_conjunctive(self, engine, events):
        """Test every date token must fall within the range."""
        assert ids(engine.search(events, '12/12/25 13/12/25', TODAY)) == ['pandu']
        assert ids(engine.search(events, '13/12/25 15/12/25', TODAY)) == []

    def test_unparseable_date_token_excludes_all(self, engine, events):
        """Test an alphabetic word that is not a date excludes every event."""
        assert engine.search(events, 'Dancing', TODAY) == []

    def test_weekday_name_excludes_all(self, engine):
        """Test a bare weekday name does not resolve to a date in early January."""
        new_year = EventProcessor().process_events([{
            'id': 'new-year',
            'college': 'Vidya College',
            'eventName': 'New Year Fest',
            'dates': '1st to 5th Jan 25'
        }])

        assert ids(engine.search(new_year, '3/1/25', date(2025, 1, 2))) == ['new-year']
        assert engine.search(new_year, 'fri', date(2025, 1, 2)) == []
        assert engine.search(new_year, 'monday', date(2025, 1, 2)) == []

    def test_invalid_slash_date_excludes_all(self, engine, events):
        """Test a slash date naming an impossible day matches nothing."""
        assert engine.search(events, '31/02/25', TODAY) == []

    def test_fuzzy_text_token(self, engine, events):
        """Test a misspelled name still finds its event."""
        assert ids(engine.search(events, 'pandu2', TODAY)) == ['pandu']

    def test_text_tokens_are_conjunctive(self, engine, events):
        """Test every text token must match the haystack."""
        assert ids(engine.search(events, "sindhu's kaizo1", TODAY)) == ['kaiso']
        assert engine.search(events, "sindhu's pune-1", TODAY) == []

    def test_text_matches_sub_events(self, engine, events):
        """Test sub-event names and types are searchable."""
        assert ids(engine.search(events, 'singing!', TODAY)) == ['pandu']

    def test_text_matches_formatted_date_range(self, engine, events):
        """Test the friendly date range is part of the haystack."""
        assert ids(engine.search(events, '12–13', TODAY)) == ['pandu']

    def test_text_results_keep_ranked_order(self, engine, events):
        """Test results preserve the ranker's order."""
        assert ids(engine.search(events, 'inter-collegiate', TODAY)) == [
            'aitran', 'kaiso', 'spring'
        ]

    def test_date_and_text_tokens_combined(self, engine, events):
        """Test date filtering applies before text matching."""
        assert ids(engine.search(events, '16/12/25 mumbai,', TODAY)) == ['kaiso']
        assert engine.search(events, '16/12/25 pune-1', TODAY) == []

    def test_stale_events_are_never_returned(self, engine, events):
        """Test events past the retention window are not searchable."""
        assert engine.search(events, 'stale-fest', TODAY) == []
        assert engine.search(events, '1/12/25', TODAY) == []


class TestBuildHaystack:
    """Test cases for build_haystack."""

    def test_haystack_fields(self, events):
        """Test the haystack joins all searchable fields in lowercase."""
        pandu = next(event for event in events if event.event_id == 'pandu')

        haystack = build_haystack(pandu)

        assert haystack == (
            'pandurang college pandu fest mumbai, vile parle 12–13 dec 2025 '
            'mixed intra-collegiate event 1 dancing event 2 singing'
        )

    def test_haystack_uses_locale(self, events):
        """Test the date text follows the given locale."""
        saman = next(event for event in events if event.event_id == 'saman')
        single_day = replace(saman, end_date=saman.start_date)

        assert 'dec 8, 2025' in build_haystack(single_day, 'en-US')
        assert '8 dec 2025' in build_haystack(single_day, 'en-GB')
