"""Coordinate-level relevance scoring.

Each query term earns one point per top-level field whose value (searched
recursively through lists and maps) contains the term as a case-insensitive
substring. Documents that match no term score zero and are dropped; documents
that match every term get a 1.5x boost.
"""

from __future__ import annotations

from typing import Any

from searchx.domain.model import Document
from searchx.domain.values import iter_scalars, render


MATCH_ALL_SCORE = 1.0
FIELD_HIT_SCORE = 1.0
ALL_TERMS_BOOST = 1.5


def tokenize_query(query: str) -> list[str]:
    """Lower-case the query and split it on whitespace."""
    return query.lower().split()


def value_contains_term(value: Any, term: str) -> bool:
    """True if any scalar reachable from ``value`` contains the lower-cased ``term``."""
    return any(term in render(scalar).lower() for scalar in iter_scalars(value))


def score_document(document: Document, query: str) -> float:
    """Score ``document`` against a free-text query; 0.0 means no match."""
    terms = tokenize_query(query)
    if not terms:
        return MATCH_ALL_SCORE

    score = 0.0
    matched_terms = 0
    for term in terms:
        hits = sum(1 for value in document.fields.values() if value_contains_term(value, term))
        if hits:
            matched_terms += 1
            score += hits * FIELD_HIT_SCORE

    if matched_terms == 0:
        return 0.0
    if matched_terms == len(terms):
        score *= ALL_TERMS_BOOST
    return score
