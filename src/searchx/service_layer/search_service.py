"""Async facade over the synchronous engine.

The engine is thread-parallel and blocking; async callers go through
``SearchService``, which hands each call to an anyio worker thread. When the
awaiting task is cancelled the worker's cancellation token is fired, so the
scan stops at the next document instead of running to completion.
"""

from __future__ import annotations

from functools import partial
import logging
from typing import TYPE_CHECKING

import anyio
from anyio import to_thread

from searchx.cancellation import CancellationToken


if TYPE_CHECKING:
    from searchx.domain.model import Document
    from searchx.domain.search import SearchOption, SearchResults
    from searchx.inmemory.searcher import InMemorySearcher
    from searchx.searcher import Searcher


logger = logging.getLogger(__name__)


class SearchService:
    """High-level async API for searching and maintaining a document store.

    Args:
        searcher: Any ``Searcher`` implementation.
        store: Optional mutable store; defaults to ``searcher`` when it exposes
            the document mutation surface.
    """

    def __init__(self, searcher: Searcher, store: InMemorySearcher | None = None) -> None:
        self.searcher = searcher
        self.store = store if store is not None else _as_store(searcher)

    async def search(
        self,
        query: str,
        *options: SearchOption,
        timeout: float | None = None,
    ) -> SearchResults:
        """Run a search in a worker thread.

        Args:
            query: Free-text query.
            options: Search options and filter expressions.
            timeout: Optional deadline in seconds; expiry raises ``SearchTimeoutError``.
        """
        token = CancellationToken(timeout=timeout)
        call = partial(self.searcher.search, query, *options, token=token)
        try:
            return await to_thread.run_sync(call, abandon_on_cancel=True)
        except anyio.get_cancelled_exc_class():
            token.cancel()
            logger.debug("Async search cancelled by caller; signalled worker to stop")
            raise

    async def add_document(self, document: Document) -> None:
        await to_thread.run_sync(self._require_store().add_document, document)

    async def add_json(self, doc_id: str, data: bytes | str) -> Document:
        return await to_thread.run_sync(self._require_store().add_json, doc_id, data)

    async def remove_document(self, doc_id: str) -> bool:
        return await to_thread.run_sync(self._require_store().remove_document, doc_id)

    async def clear(self) -> None:
        await to_thread.run_sync(self._require_store().clear)

    async def size(self) -> int:
        return await to_thread.run_sync(self._require_store().size)

    def _require_store(self) -> InMemorySearcher:
        if self.store is None:
            raise TypeError(f"{type(self.searcher).__name__} does not support document mutation")
        return self.store


def _as_store(searcher: Searcher) -> InMemorySearcher | None:
    required = ("add_document", "add_json", "remove_document", "clear", "size")
    if all(callable(getattr(searcher, name, None)) for name in required):
        return searcher  # type: ignore[return-value]
    return None
