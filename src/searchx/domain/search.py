"""Search configuration, options and the result envelope.

``SearchConfig`` is mutable scratch state built fresh for every call by
applying options to it. ``SearchResult`` and ``SearchResults`` are immutable
value objects handed back to the caller and never retained by the engine.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from searchx.domain.values import Value
from searchx.errors import InvalidOptionError


if TYPE_CHECKING:
    from searchx.domain.expressions import Expression


SCORE_FIELD = "_score"


@dataclass(frozen=True)
class SortField:
    """One sort key; ``_score`` addresses the relevance score instead of a field."""

    field: str
    desc: bool = False


@dataclass
class SearchConfig:
    """Mutable configuration assembled from options for a single search."""

    limit: int = 0
    offset: int = 0
    sort: list[SortField] = field(default_factory=list)
    filters: list[Expression] = field(default_factory=list)


@runtime_checkable
class SearchOption(Protocol):
    """Anything that can configure a search by mutating a ``SearchConfig``."""

    def apply(self, config: SearchConfig) -> None: ...


@dataclass(frozen=True)
class OptionFunc:
    """Adapts a plain callable into a ``SearchOption``."""

    func: Callable[[SearchConfig], None]

    def apply(self, config: SearchConfig) -> None:
        self.func(config)


def option_func(func: Callable[[SearchConfig], None]) -> SearchOption:
    """Wrap ``func`` so it can be passed wherever a search option is accepted."""
    return OptionFunc(func)


def with_limit(n: int) -> SearchOption:
    """Cap the number of returned items; 0 selects the configured default."""
    if n < 0:
        raise InvalidOptionError(f"searchx: limit must be >= 0, got {n}")

    def _apply(config: SearchConfig) -> None:
        config.limit = n

    return OptionFunc(_apply)


def with_offset(n: int) -> SearchOption:
    """Skip the first ``n`` ranked matches."""
    if n < 0:
        raise InvalidOptionError(f"searchx: offset must be >= 0, got {n}")

    def _apply(config: SearchConfig) -> None:
        config.offset = n

    return OptionFunc(_apply)


def with_sort(field_name: str, desc: bool = False) -> SearchOption:
    """Append a sort key; keys are applied in the order they were added."""

    def _apply(config: SearchConfig) -> None:
        config.sort.append(SortField(field=field_name, desc=desc))

    return OptionFunc(_apply)


def build_config(options: tuple[SearchOption, ...] | list[SearchOption]) -> SearchConfig:
    config = SearchConfig()
    for option in options:
        option.apply(config)
    return config


class SearchResult(BaseModel):
    """A single ranked match."""

    model_config = ConfigDict(frozen=True)

    id: str
    score: float
    fields: dict[str, Value] = Field(default_factory=dict)


class SearchResults(BaseModel):
    """Envelope returned by every search call."""

    model_config = ConfigDict(frozen=True)

    items: list[SearchResult] = Field(default_factory=list)
    total: int = 0
    took: timedelta = timedelta(0)
    max_score: float = 0.0
    query: str = ""
    next_offset: int | None = None

    @property
    def took_ms(self) -> int:
        return int(self.took.total_seconds() * 1000)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self.items]
