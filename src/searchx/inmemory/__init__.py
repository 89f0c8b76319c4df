"""In-memory search backend.

- rwlock: shared/exclusive lock guarding the document set
- expressions: filter-expression evaluation
- scoring: coordinate-level relevance scoring
- ranking: multi-key sorting and pagination
- searcher: document store and query executor
"""

from searchx.inmemory.searcher import InMemorySearcher


__all__ = ["InMemorySearcher"]
