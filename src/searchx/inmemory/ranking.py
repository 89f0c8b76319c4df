"""Ordering of scored matches and page slicing."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING

from searchx.domain.search import SCORE_FIELD, SortField
from searchx.domain.values import compare_values


if TYPE_CHECKING:
    from collections.abc import Sequence

    from searchx.domain.model import Document


DEFAULT_SORT = (SortField(field=SCORE_FIELD, desc=True),)


@dataclass(frozen=True)
class ScoredDocument:
    document: Document
    score: float


@dataclass(frozen=True)
class Page:
    """Half-open slice ``[start, end)`` of a ranked list."""

    start: int
    end: int
    total: int

    @property
    def next_offset(self) -> int | None:
        return self.end if self.end < self.total else None


def _compare_key(left: ScoredDocument, right: ScoredDocument, sort_field: SortField) -> int:
    if sort_field.field == SCORE_FIELD:
        cmp = compare_values(left.score, right.score)
    else:
        cmp = compare_values(left.document.fields.get(sort_field.field), right.document.fields.get(sort_field.field))
    return -cmp if sort_field.desc else cmp


def sort_matches(matches: Sequence[ScoredDocument], sort_fields: Sequence[SortField] = ()) -> list[ScoredDocument]:
    """Return ``matches`` ordered by ``sort_fields`` (score descending when empty).

    Keys apply left to right, falling through to the next key only on a tie.
    Python's sort is stable, so remaining ties keep scan order.
    """
    keys = tuple(sort_fields) or DEFAULT_SORT

    def _compare(left: ScoredDocument, right: ScoredDocument) -> int:
        for sort_field in keys:
            cmp = _compare_key(left, right, sort_field)
            if cmp:
                return cmp
        return 0

    return sorted(matches, key=cmp_to_key(_compare))


def paginate(total: int, offset: int, limit: int) -> Page:
    """Clamp ``[offset, offset + limit)`` to ``[0, total]``."""
    start = min(max(offset, 0), total)
    end = min(max(offset, 0) + max(limit, 0), total)
    return Page(start=start, end=max(start, end), total=total)
