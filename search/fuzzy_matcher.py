"""Typo-tolerant matching of query tokens against event text.

A token matches a word when the word contains it, or when the Levenshtein
distance between them stays within a threshold that grows with the token's
length. Haystack matching also accepts plain substring containment across
the whole text.
"""
import re

from rapidfuzz.distance import Levenshtein

WORD_SPLIT = re.compile(r'[^a-z0-9]+')


def edit_distance(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance (insert, delete, substitute)."""
    return Levenshtein.distance(a.lower(), b.lower())


def match_threshold(token_length: int) -> int:
    """Maximum edit distance accepted for a token of the given length."""
    if token_length <= 4:
        return 1
    if token_length <= 7:
        return 2
    return 3


def token_matches_word(token: str, word: str) -> bool:
    """
    Check whether a query token plausibly refers to a word.

    Args:
        token: Search token
        word: Candidate word from the event text

    Returns:
        True on substring containment or a small enough edit distance
    """
    if not token:
        return True

    token = token.lower()
    word = word.lower()
    if token in word:
        return True

    return edit_distance(token, word) <= match_threshold(len(token))


def token_matches_haystack(token: str, haystack: str) -> bool:
    """
    Check whether a query token matches anywhere in a block of text.

    Args:
        token: Search token
        haystack: Searchable event text

    Returns:
        True if the text contains the token or any of its words matches it
    """
    text = (haystack or '').lower()
    if token.lower() in text:
        return True

    words = [word for word in WORD_SPLIT.split(text) if word]
    return any(token_matches_word(token, word) for word in words)
