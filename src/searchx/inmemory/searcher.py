"""In-memory document store and query executor.

The store keeps documents in insertion order alongside an id -> position
index. Searches scan every document under a shared lock, so a search sees the
collection exactly as it was when the lock was taken; mutations wait for
in-flight searches to finish.
"""

from __future__ import annotations

from datetime import timedelta
import logging
import time
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from searchx.cancellation import CancellationToken
from searchx.config import Settings, get_settings
from searchx.domain.model import Document
from searchx.domain.search import SearchConfig, SearchResult, SearchResults, build_config
from searchx.errors import MalformedDocumentError, SearchCancelledError, SearchTimeoutError
from searchx.inmemory.expressions import matches_filters
from searchx.inmemory.ranking import ScoredDocument, paginate, sort_matches
from searchx.inmemory.rwlock import ReadWriteLock
from searchx.inmemory.scoring import score_document
from searchx.observability.context import bound_trace_context
from searchx.observability.metrics import DOCUMENT_COUNT, SEARCH_COUNT, SEARCH_LATENCY, track_latency
from searchx.observability.tracing import create_span


if TYPE_CHECKING:
    from searchx.domain.search import SearchOption


logger = logging.getLogger(__name__)


class InMemorySearcher:
    """Thread-safe document store that answers searches by full scan."""

    def __init__(self, settings: Settings | None = None, *, name: str | None = None) -> None:
        self._settings = settings or get_settings()
        self.name = name or self._settings.store_name
        self._lock = ReadWriteLock()
        self._documents: list[Document] = []
        self._id_index: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_document(self, document: Document) -> None:
        """Insert ``document``, or replace the stored one with the same id in place."""
        with self._bound_store():
            with self._lock.write_locked():
                position = self._id_index.get(document.id)
                if position is None:
                    self._id_index[document.id] = len(self._documents)
                    self._documents.append(document)
                else:
                    self._documents[position] = document
                self._record_size()
            logger.debug("Stored document %s (replaced=%s)", document.id, position is not None)

    def add_json(self, doc_id: str, data: bytes | str) -> Document:
        """Decode a JSON object into a document and store it.

        Raises:
            MalformedDocumentError: the payload is not a JSON object or the id is
                invalid. The store is left untouched.
        """
        with self._bound_store():
            try:
                fields = orjson.loads(data)
            except orjson.JSONDecodeError as exc:
                logger.warning("Rejected malformed JSON for document %s: %s", doc_id, exc)
                raise MalformedDocumentError(doc_id, f"failed to unmarshal JSON: {exc}") from exc

            if not isinstance(fields, dict):
                logger.warning("Rejected non-object JSON for document %s", doc_id)
                raise MalformedDocumentError(doc_id, f"expected a JSON object, got {type(fields).__name__}")

            try:
                document = Document(id=doc_id, fields=fields)
            except ValidationError as exc:
                logger.warning("Rejected invalid document %s: %s", doc_id, exc.errors(include_url=False))
                raise MalformedDocumentError(doc_id, str(exc)) from exc

            self.add_document(document)
        return document

    def remove_document(self, doc_id: str) -> bool:
        """Remove a document by id, keeping the order of the others.

        Returns:
            True if a document was removed, False if the id was unknown.
        """
        with self._bound_store():
            with self._lock.write_locked():
                position = self._id_index.pop(doc_id, None)
                if position is None:
                    return False
                del self._documents[position]
                for shifted in range(position, len(self._documents)):
                    self._id_index[self._documents[shifted].id] = shifted
                self._record_size()
            logger.debug("Removed document %s", doc_id)
        return True

    def clear(self) -> None:
        with self._bound_store():
            with self._lock.write_locked():
                removed = len(self._documents)
                self._documents = []
                self._id_index = {}
                self._record_size()
            logger.info("Cleared store (%d documents removed)", removed)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def size(self) -> int:
        with self._lock.read_locked():
            return len(self._documents)

    def __len__(self) -> int:
        return self.size()

    def get_document(self, doc_id: str) -> Document | None:
        with self._lock.read_locked():
            position = self._id_index.get(doc_id)
            return None if position is None else self._documents[position]

    def search(
        self,
        query: str,
        *options: SearchOption,
        token: CancellationToken | None = None,
    ) -> SearchResults:
        """Filter, score, rank and paginate the whole collection.

        Args:
            query: Free-text query; empty or whitespace-only matches everything.
            options: Limit/offset/sort options and filter expressions.
            token: Optional cancellation token checked before and during the scan.

        Raises:
            SearchCancelledError: the token fired; no partial results are returned.
        """
        started = time.perf_counter()
        status = "error"
        with self._bound_store(), track_latency(SEARCH_LATENCY, store=self.name):
            with create_span("searchx.search", attributes={"searchx.store": self.name, "searchx.query": query}) as span:
                try:
                    results = self._execute(query, options, token or CancellationToken(), started)
                    status = "ok"
                except SearchTimeoutError:
                    status = "timeout"
                    logger.info("Search timed out after %.3fs", time.perf_counter() - started)
                    raise
                except SearchCancelledError:
                    status = "cancelled"
                    logger.info("Search cancelled")
                    raise
                finally:
                    SEARCH_COUNT.labels(store=self.name, status=status).inc()

                span.set_attribute("searchx.total", results.total)
                span.set_attribute("searchx.returned", len(results.items))
                logger.debug(
                    "Search query=%r total=%d returned=%d took=%dms",
                    query,
                    results.total,
                    len(results.items),
                    results.took_ms,
                )
        return results

    def _execute(
        self,
        query: str,
        options: tuple[SearchOption, ...],
        token: CancellationToken,
        started: float,
    ) -> SearchResults:
        token.raise_if_cancelled()

        config = build_config(options)
        limit = config.limit or self._settings.default_limit

        with self._lock.read_locked():
            matches = self._collect_matches(query, config, token)
            token.raise_if_cancelled()
            ranked = sort_matches(matches, config.sort)

        page = paginate(len(ranked), config.offset, limit)
        items = [
            SearchResult(id=match.document.id, score=match.score, fields=match.document.fields)
            for match in ranked[page.start : page.end]
        ]

        return SearchResults(
            items=items,
            total=page.total,
            took=timedelta(seconds=time.perf_counter() - started),
            max_score=max((item.score for item in items), default=0.0),
            query=query,
            next_offset=page.next_offset,
        )

    def _collect_matches(self, query: str, config: SearchConfig, token: CancellationToken) -> list[ScoredDocument]:
        # Caller holds the read lock.
        matches: list[ScoredDocument] = []
        for document in self._documents:
            token.raise_if_cancelled()
            if not matches_filters(document, config.filters):
                continue
            score = score_document(document, query)
            if score > 0:
                matches.append(ScoredDocument(document=document, score=score))
        return matches

    def _record_size(self) -> None:
        # Caller holds the write lock.
        DOCUMENT_COUNT.labels(store=self.name).set(len(self._documents))

    def _bound_store(self):
        return bound_trace_context(store=self.name)
