"""Unit tests for filter-expression evaluation."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from searchx.domain.expressions import (
    And,
    Eq,
    Operator,
    Or,
    and_,
    eq,
    exists,
    gt,
    gte,
    lt,
    lte,
    ne,
    not_,
    or_,
    range_,
)
from searchx.domain.model import Document
from searchx.domain.search import SearchConfig
from searchx.errors import ErrorCode, InvalidExpressionError
from searchx.inmemory.expressions import evaluate, matches_filters


JOHN = Document(
    id="1",
    fields={
        "name": "John Doe",
        "age": 32,
        "score": 85.5,
        "active": True,
        "tags": ["developer", "golang"],
        "location": "New York",
        "nickname": None,
    },
)
JANE = Document(id="2", fields={"name": "Jane Smith", "age": 25, "score": 92.0, "active": False})


@pytest.mark.parametrize(
    ("doc", "expression", "expected"),
    [
        (JOHN, eq("name", "John Doe"), True),
        (JOHN, eq("name", "Jane Smith"), False),
        (JOHN, eq("age", 32), True),
        (JOHN, eq("age", 32.0), True),
        (JOHN, eq("score", 85.5), True),
        (JOHN, eq("active", True), True),
        (JOHN, eq("active", "true"), True),
        (JANE, eq("location", "New York"), False),
        (JANE, eq("location", None), True),
        (JOHN, eq("nickname", None), True),
        (JOHN, eq("location", None), False),
        (JOHN, ne("name", "Jane Smith"), True),
        (JOHN, ne("name", "John Doe"), False),
        (JOHN, ne("age", 25), True),
        (JANE, ne("location", "New York"), True),
        (JANE, ne("location", None), False),
        (JOHN, ne("nickname", None), False),
    ],
)
def test_equality_expressions(doc, expression, expected):
    assert evaluate(doc, expression) is expected


@pytest.mark.parametrize(
    ("doc", "expression", "expected"),
    [
        (JOHN, gt("age", 25), True),
        (JOHN, gt("age", 32), False),
        (JOHN, gte("age", 32), True),
        (JOHN, gte("age", 32.0), True),
        (JOHN, lt("age", 40), True),
        (JOHN, lt("age", 32), False),
        (JOHN, lte("age", 32), True),
        (JOHN, gt("name", "Adam"), True),
        (JOHN, lt("name", "Adam"), False),
        (JOHN, gt("nickname", None), False),
        (JOHN, gte("nickname", None), True),
        (JOHN, gt("age", None), True),
    ],
)
def test_ordering_expressions(doc, expression, expected):
    assert evaluate(doc, expression) is expected


@pytest.mark.parametrize("builder", [gt, gte, lt, lte])
def test_ordering_on_absent_field_is_always_false(builder):
    assert evaluate(JANE, builder("location", "A")) is False
    assert evaluate(JANE, builder("location", None)) is False


class TestRange:
    def test_inclusive_bounds(self):
        assert evaluate(JOHN, range_("age", 32, 32))
        assert evaluate(JOHN, range_("age", 30, 35))
        assert not evaluate(JOHN, range_("age", 33, 40))
        assert not evaluate(JOHN, range_("age", 20, 31.9))

    def test_open_bounds(self):
        assert evaluate(JOHN, range_("age", None, 40))
        assert evaluate(JOHN, range_("age", 30, None))
        assert evaluate(JOHN, range_("age"))
        assert not evaluate(JOHN, range_("age", None, 31))

    def test_absent_field_fails(self):
        assert not evaluate(JANE, range_("location"))


def test_exists_checks_key_presence_even_for_null():
    assert evaluate(JOHN, exists("location"))
    assert evaluate(JOHN, exists("nickname"))
    assert not evaluate(JANE, exists("location"))


class TestLogicalExpressions:
    def test_empty_and_is_true_and_empty_or_is_false(self):
        assert evaluate(JOHN, and_()) is True
        assert evaluate(JOHN, or_()) is False

    def test_and_requires_every_child(self):
        assert evaluate(JOHN, and_(eq("active", True), gte("age", 30)))
        assert not evaluate(JOHN, and_(eq("active", True), gte("age", 40)))

    def test_or_requires_any_child(self):
        assert evaluate(JANE, or_(eq("name", "nobody"), lt("age", 30)))
        assert not evaluate(JANE, or_(eq("name", "nobody"), gt("age", 30)))

    def test_not_negates(self):
        assert evaluate(JANE, not_(eq("active", True)))
        assert not evaluate(JOHN, not_(exists("name")))

    def test_nested_tree(self):
        expression = and_(
            or_(eq("location", "New York"), eq("location", "Boston")),
            not_(lt("score", 80)),
        )
        assert evaluate(JOHN, expression)
        assert not evaluate(JANE, expression)

    def test_and_short_circuits_on_first_false(self):
        # The second child is not an expression; reaching it would raise.
        assert evaluate(JOHN, And((eq("age", 0), object()))) is False  # type: ignore[arg-type]

    def test_or_short_circuits_on_first_true(self):
        assert evaluate(JOHN, Or((eq("age", 32), object()))) is True  # type: ignore[arg-type]


def test_unknown_expression_is_rejected():
    with pytest.raises(InvalidExpressionError) as excinfo:
        evaluate(JOHN, "age > 3")  # type: ignore[arg-type]

    assert excinfo.value.code is ErrorCode.INVALID_EXPRESSION
    assert isinstance(excinfo.value, TypeError)


def test_matches_filters_is_implicit_and():
    assert matches_filters(JOHN, [])
    assert matches_filters(JOHN, [eq("active", True), gt("age", 30)])
    assert not matches_filters(JOHN, [eq("active", True), gt("age", 40)])


class TestExpressionData:
    def test_builders_produce_immutable_values(self):
        expression = eq("age", 5)

        assert expression == Eq("age", 5)
        with pytest.raises(FrozenInstanceError):
            expression.field = "other"  # type: ignore[misc]

    def test_comparisons_carry_their_operator(self):
        assert eq("a", 1).operator is Operator.EQ
        assert ne("a", 1).operator is Operator.NE
        assert gt("a", 1).operator is Operator.GT
        assert gte("a", 1).operator is Operator.GTE
        assert lt("a", 1).operator is Operator.LT
        assert lte("a", 1).operator is Operator.LTE
        assert exists("a").operator is Operator.EXISTS
        assert Operator.GTE == "gte"

    def test_expressions_apply_as_filters(self):
        config = SearchConfig()
        first = eq("a", 1)
        second = or_(exists("b"), not_(exists("c")))

        first.apply(config)
        second.apply(config)

        assert config.filters == [first, second]
