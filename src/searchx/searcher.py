"""The core search interface shared by every backend."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from searchx.cancellation import CancellationToken
    from searchx.domain.search import SearchOption, SearchResults


@runtime_checkable
class Searcher(Protocol):
    """Executes a free-text query narrowed and shaped by search options."""

    def search(
        self,
        query: str,
        *options: SearchOption,
        token: CancellationToken | None = None,
    ) -> SearchResults: ...


class SearcherFunc:
    """Adapts a plain function into a ``Searcher``."""

    def __init__(self, func: Callable[..., SearchResults]) -> None:
        self._func = func

    def search(
        self,
        query: str,
        *options: SearchOption,
        token: CancellationToken | None = None,
    ) -> SearchResults:
        return self._func(query, *options, token=token)
