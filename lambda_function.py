"""AWS Lambda handler for college festival event search."""
import json
import logging
import os
import time
from collections.abc import Mapping
from datetime import date
from typing import Any, Dict, List, Optional

from processor.date_format import format_friendly_range
from processor.event_processor import EventProcessor
from processor.models import RankedEvent
from search.engine import SearchEngine
from search.ranker import EventRanker
from storage.event_store import DynamoDBEventStore


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _request_params(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge direct-invocation fields with API Gateway query parameters.

    Args:
        event: Lambda event payload

    Returns:
        Dict with 'query', 'today' and optionally 'events'
    """
    params = event.get('queryStringParameters')
    if not isinstance(params, Mapping):
        params = {}
    query = event.get('query', params.get('q', params.get('query')))
    return {
        'query': str(query) if query is not None else '',
        'today': event.get('today', params.get('today')),
        'events': event.get('events')
    }


def _parse_today(value: Optional[str]) -> date:
    """
    Resolve the reference date of a request.

    Raises:
        ValueError: If the value is not an ISO date (YYYY-MM-DD)
    """
    if not value:
        return date.today()
    return date.fromisoformat(value)


def _ranked_event_to_dict(event: RankedEvent, locale: str) -> Dict[str, Any]:
    """
    Convert RankedEvent object to a JSON-serializable result.

    Args:
        event: RankedEvent object
        locale: Language tag for the display date range

    Returns:
        Result dictionary
    """
    return {
        'id': event.event_id,
        'college': event.college,
        'name': event.name,
        'city': event.city,
        'start_date': event.start_date.isoformat(),
        'end_date': event.end_date.isoformat(),
        'date_range': format_friendly_range(event.start_date, event.end_date, locale),
        'event_type': event.event_type,
        'competition_type': event.competition_type,
        'category': event.category.value
    }


def _error_response(status_code: int, message: str, error: Exception,
                    start_time: float) -> Dict[str, Any]:
    duration = time.time() - start_time
    return {
        'statusCode': status_code,
        'body': json.dumps({
            'message': message,
            'error': str(error),
            'error_type': type(error).__name__,
            'duration_seconds': round(duration, 2)
        })
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for event search.

    Args:
        event: Direct invocation payload ({query, today, events}) or
            API Gateway proxy event (queryStringParameters q/query, today)
        context: Lambda context object

    Returns:
        Response dict with statusCode and the ranked search results
    """
    # Read configuration from environment variables
    table_name = os.environ.get('TABLE_NAME', 'college-fest-events')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    locale = os.environ.get('LOCALE', 'en-US')
    retention_days = int(os.environ.get('RETENTION_DAYS', '7'))

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()

    if event is None:
        event = {}
    if not isinstance(event, Mapping):
        error = TypeError(f"Expected a JSON object payload, got {type(event).__name__}")
        logger.warning(str(error))
        return _error_response(400, 'Invalid request payload', error, start_time)

    params = _request_params(event)

    if params['events'] is not None and not isinstance(params['events'], list):
        error = TypeError(
            f"Expected 'events' to be a list, got {type(params['events']).__name__}"
        )
        logger.warning(str(error))
        return _error_response(400, 'Invalid request payload', error, start_time)

    try:
        today = _parse_today(params['today'])
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid 'today' parameter: {params['today']!r}")
        return _error_response(400, "Invalid 'today' parameter, expected YYYY-MM-DD", e, start_time)

    logger.info(
        f"Search request received",
        extra={'query': params['query'], 'today': today.isoformat()}
    )

    try:
        records: List[Any] = params['events']
        if records is None:
            try:
                store = DynamoDBEventStore(table_name=table_name)
                records = store.get_all_records()
            except Exception as e:
                logger.error(
                    f"Failed to load events from DynamoDB: {str(e)}",
                    extra={'error_type': type(e).__name__},
                    exc_info=True
                )
                return _error_response(500, 'Failed to load events', e, start_time)

        processor = EventProcessor()
        summaries = processor.process_events(records)

        engine = SearchEngine(
            ranker=EventRanker(retention_days=retention_days),
            locale=locale
        )
        results = engine.search(summaries, params['query'], today)

        duration = time.time() - start_time
        logger.info(
            f"Search completed with {len(results)} results",
            extra={'duration_seconds': round(duration, 2)}
        )

        return {
            'statusCode': 200,
            'body': json.dumps({
                'query': params['query'],
                'today': today.isoformat(),
                'count': len(results),
                'results': [_ranked_event_to_dict(r, locale) for r in results],
                'duration_seconds': round(duration, 2)
            })
        }

    except Exception as e:
        logger.error(
            f"Search failed: {str(e)}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        return _error_response(500, 'Search failed', e, start_time)
