"""Error taxonomy for search operations.

Every error raised by the engine derives from ``SearchError`` and carries a
stable numeric ``ErrorCode`` so adapters can map failures without string
matching. Cancellation and malformed input are the only kinds raised during
normal operation; the rest guard programming mistakes at the API boundary.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable codes attached to every ``SearchError``."""

    UNKNOWN = 0
    INVALID_OPTION = 1001
    INVALID_EXPRESSION = 1002
    TIMEOUT = 1003
    CANCELED = 1004
    # Reserved for remote search adapters.
    BACKEND_UNAVAILABLE = 1006
    MALFORMED_DOCUMENT = 1007

    def __str__(self) -> str:
        return _CODE_DESCRIPTIONS.get(self, "unknown error")


_CODE_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.UNKNOWN: "unknown error",
    ErrorCode.INVALID_OPTION: "invalid option",
    ErrorCode.INVALID_EXPRESSION: "invalid expression",
    ErrorCode.TIMEOUT: "operation timed out",
    ErrorCode.CANCELED: "operation canceled",
    ErrorCode.BACKEND_UNAVAILABLE: "backend unavailable",
    ErrorCode.MALFORMED_DOCUMENT: "malformed document",
}


class SearchError(Exception):
    """Base class for all searchx errors."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"searchx: {self.code}")

    @property
    def error_type(self) -> str:
        return self.code.name.lower()


class SearchCancelledError(SearchError):
    """The caller's cancellation token fired before or during a search."""

    code = ErrorCode.CANCELED


class SearchTimeoutError(SearchCancelledError):
    """The caller's deadline elapsed; a specialised cancellation."""

    code = ErrorCode.TIMEOUT


class MalformedDocumentError(SearchError, ValueError):
    """A serialized document could not be decoded into a field map."""

    code = ErrorCode.MALFORMED_DOCUMENT

    def __init__(self, document_id: str, reason: str) -> None:
        self.document_id = document_id
        self.reason = reason
        super().__init__(f"searchx: malformed document {document_id!r}: {reason}")


class InvalidExpressionError(SearchError, TypeError):
    """An object outside the closed expression set reached the evaluator."""

    code = ErrorCode.INVALID_EXPRESSION


class InvalidOptionError(SearchError, ValueError):
    """A search option was built with an out-of-range argument."""

    code = ErrorCode.INVALID_OPTION
