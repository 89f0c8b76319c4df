"""Composable boolean filter expressions.

Expressions are immutable data; they carry no evaluation state. Every
expression is also a search option: applying one appends it to the config's
filter list, where all filters combine with an implicit AND.

    searcher.search("python", eq("category", "programming"), gte("year", 2021))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias


if TYPE_CHECKING:
    from searchx.domain.search import SearchConfig


class Operator(str, Enum):
    """Comparison operators understood by the evaluator."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    EXISTS = "exists"


class _Filter:
    """Mixin that makes an expression usable as a search option."""

    __slots__ = ()

    def apply(self, config: SearchConfig) -> None:
        config.filters.append(self)  # type: ignore[arg-type]


@dataclass(frozen=True)
class And(_Filter):
    children: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Or(_Filter):
    children: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Not(_Filter):
    inner: Expression


@dataclass(frozen=True)
class _FieldComparison(_Filter):
    field: str
    value: Any = None

    operator: ClassVar[Operator]


@dataclass(frozen=True)
class Eq(_FieldComparison):
    operator: ClassVar[Operator] = Operator.EQ


@dataclass(frozen=True)
class Ne(_FieldComparison):
    operator: ClassVar[Operator] = Operator.NE


@dataclass(frozen=True)
class Gt(_FieldComparison):
    operator: ClassVar[Operator] = Operator.GT


@dataclass(frozen=True)
class Gte(_FieldComparison):
    operator: ClassVar[Operator] = Operator.GTE


@dataclass(frozen=True)
class Lt(_FieldComparison):
    operator: ClassVar[Operator] = Operator.LT


@dataclass(frozen=True)
class Lte(_FieldComparison):
    operator: ClassVar[Operator] = Operator.LTE


@dataclass(frozen=True)
class Range(_Filter):
    """Inclusive range; a ``None`` bound leaves that side open."""

    field: str
    min: Any = None
    max: Any = None


@dataclass(frozen=True)
class Exists(_Filter):
    field: str

    operator: ClassVar[Operator] = Operator.EXISTS


Expression: TypeAlias = And | Or | Not | Eq | Ne | Gt | Gte | Lt | Lte | Range | Exists

Comparison: TypeAlias = Gt | Gte | Lt | Lte


def and_(*children: Expression) -> And:
    return And(tuple(children))


def or_(*children: Expression) -> Or:
    return Or(tuple(children))


def not_(inner: Expression) -> Not:
    return Not(inner)


def eq(field: str, value: Any) -> Eq:
    return Eq(field, value)


def ne(field: str, value: Any) -> Ne:
    return Ne(field, value)


def gt(field: str, value: Any) -> Gt:
    return Gt(field, value)


def gte(field: str, value: Any) -> Gte:
    return Gte(field, value)


def lt(field: str, value: Any) -> Lt:
    return Lt(field, value)


def lte(field: str, value: Any) -> Lte:
    return Lte(field, value)


def range_(field: str, min: Any = None, max: Any = None) -> Range:  # noqa: A002
    return Range(field, min, max)


def exists(field: str) -> Exists:
    return Exists(field)
