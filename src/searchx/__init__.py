"""searchx - an in-process document store with a composable query engine.

Build filters with the expression helpers, shape results with options, and
run them against an ``InMemorySearcher``::

    searcher = InMemorySearcher()
    searcher.add_json("1", b'{"category": "programming", "year": 2021}')
    results = searcher.search("", eq("category", "programming"), with_limit(5))
"""

from searchx.cancellation import CancellationToken
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
from searchx.domain.search import (
    SCORE_FIELD,
    SearchConfig,
    SearchOption,
    SearchResult,
    SearchResults,
    SortField,
    option_func,
    with_limit,
    with_offset,
    with_sort,
)
from searchx.errors import (
    ErrorCode,
    InvalidExpressionError,
    InvalidOptionError,
    MalformedDocumentError,
    SearchCancelledError,
    SearchError,
    SearchTimeoutError,
)
from searchx.inmemory import InMemorySearcher
from searchx.searcher import Searcher, SearcherFunc


__all__ = [
    "SCORE_FIELD",
    "And",
    "CancellationToken",
    "Document",
    "Eq",
    "ErrorCode",
    "Exists",
    "Expression",
    "Gt",
    "Gte",
    "InMemorySearcher",
    "InvalidExpressionError",
    "InvalidOptionError",
    "Lt",
    "Lte",
    "MalformedDocumentError",
    "Ne",
    "Not",
    "Operator",
    "Or",
    "Range",
    "SearchCancelledError",
    "SearchConfig",
    "SearchError",
    "SearchOption",
    "SearchResult",
    "SearchResults",
    "SearchTimeoutError",
    "Searcher",
    "SearcherFunc",
    "SortField",
    "and_",
    "eq",
    "exists",
    "gt",
    "gte",
    "lt",
    "lte",
    "ne",
    "not_",
    "option_func",
    "or_",
    "range_",
    "with_limit",
    "with_offset",
    "with_sort",
]
