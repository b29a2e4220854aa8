"""Tokenization and classification of free-text search queries."""
import re
from typing import List

from processor.models import QueryClassification
from search.date_tokens import day_only_value

DATE_CANDIDATE = re.compile(r'^(?:\d{1,2}/\d{1,2}/(?:\d{2}|\d{4})|[a-z]+)$', re.IGNORECASE)


def tokenize(query: str) -> List[str]:
    """Split a query on whitespace, dropping empty tokens."""
    return (query or '').split()


def classify_query(query: str) -> QueryClassification:
    """
    Classify query tokens as date tokens or text tokens.

    A bare day token ("12", "12th") anywhere in the query switches the
    whole query to day-only mode and every other token is ignored.
    Slash dates and purely alphabetic tokens are date candidates
    (month names, "Nov", "13/12/25"); everything else is a lowercased
    text token.

    Args:
        query: Raw search input

    Returns:
        QueryClassification; day_only is set in day-only mode
    """
    classification = QueryClassification()

    for token in tokenize(query):
        day = day_only_value(token)
        if day is not None:
            return QueryClassification(day_only=day)

        if DATE_CANDIDATE.match(token):
            classification.date_tokens.append(token)
        else:
            classification.text_tokens.append(token.lower())

    return classification
