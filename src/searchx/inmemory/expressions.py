"""Evaluation of filter expressions against a single document."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from searchx.domain.expressions import (
    And,
    Eq,
    Exists,
    Expression,
    Gt,
    Gte,
    Lt,
    Lte,
    Ne,
    Not,
    Operator,
    Or,
    Range,
)
from searchx.domain.model import Document
from searchx.domain.values import compare_values, values_equal
from searchx.errors import InvalidExpressionError


_MISSING = object()

_ORDERING_CHECKS: dict[Operator, Callable[[int], bool]] = {
    Operator.GT: lambda cmp: cmp > 0,
    Operator.GTE: lambda cmp: cmp >= 0,
    Operator.LT: lambda cmp: cmp < 0,
    Operator.LTE: lambda cmp: cmp <= 0,
}


def matches_filters(document: Document, filters: Iterable[Expression]) -> bool:
    """True when the document satisfies every filter (implicit AND)."""
    return all(evaluate(document, expression) for expression in filters)


def evaluate(document: Document, expression: Expression) -> bool:
    """Evaluate ``expression`` against ``document``.

    An absent field never satisfies an ordering comparison or a range, while
    ``Eq``/``Ne`` treat it as null. Anything outside the expression set raises
    ``InvalidExpressionError`` rather than silently passing the document.
    """
    match expression:
        case And(children=children):
            return all(evaluate(document, child) for child in children)
        case Or(children=children):
            return any(evaluate(document, child) for child in children)
        case Not(inner=inner):
            return not evaluate(document, inner)
        case Eq(field=field, value=value):
            actual = document.fields.get(field, _MISSING)
            if actual is _MISSING:
                return value is None
            return values_equal(actual, value)
        case Ne(field=field, value=value):
            actual = document.fields.get(field, _MISSING)
            if actual is _MISSING:
                return value is not None
            return not values_equal(actual, value)
        case Gt() | Gte() | Lt() | Lte():
            actual = document.fields.get(expression.field, _MISSING)
            if actual is _MISSING:
                return False
            return _ORDERING_CHECKS[expression.operator](compare_values(actual, expression.value))
        case Range(field=field, min=lower, max=upper):
            actual = document.fields.get(field, _MISSING)
            if actual is _MISSING:
                return False
            return _within(actual, lower, upper)
        case Exists(field=field):
            return field in document.fields
        case _:
            raise InvalidExpressionError(f"searchx: unsupported expression {type(expression).__name__}")


def _within(actual: Any, lower: Any, upper: Any) -> bool:
    if lower is not None and compare_values(actual, lower) < 0:
        return False
    return not (upper is not None and compare_values(actual, upper) > 0)
