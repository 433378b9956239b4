"""Error hierarchy for drive2notion.

Every public error class inherits from :class:`Drive2NotionError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and an
optional ``cause`` (chained exception).

The Markdown-to-blocks converter never raises: every node kind it can meet
has a fallback output.  All of the errors below belong to the network
boundary (the Notion transport and the batch emitter).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    BATCH_FAILED = "BATCH_FAILED"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class Drive2NotionError(Exception):
    """Base exception for all drive2notion errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class _CodedError(Drive2NotionError):
    """Subclass helper: binds a fixed :class:`ErrorCode`."""

    _code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=self._code,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API / transport errors
# ---------------------------------------------------------------------------

class Drive2NotionValidationError(_CodedError):
    """Notion API returned 400 (or another unclassified 4xx).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    _code = ErrorCode.VALIDATION_ERROR


class Drive2NotionAuthError(_CodedError):
    """Notion API returned 401: the integration token is invalid or expired."""

    _code = ErrorCode.AUTH_ERROR


class Drive2NotionPermissionError(_CodedError):
    """Notion API returned 403: the integration lacks access to the resource.

    Context keys: ``status_code``, ``operation``.
    """

    _code = ErrorCode.PERMISSION_ERROR


class Drive2NotionNotFoundError(_CodedError):
    """Notion API returned 404.

    Context keys: ``status_code``, ``path``.
    """

    _code = ErrorCode.NOT_FOUND


class Drive2NotionConflictError(_CodedError):
    """Notion API returned 409: a concurrent edit touched the same object."""

    _code = ErrorCode.CONFLICT


class Drive2NotionRateLimitError(_CodedError):
    """Notion API returned 429.  Not retried here.

    Context keys: ``status_code``, ``retry_after_seconds``.
    """

    _code = ErrorCode.RATE_LIMITED


class Drive2NotionServerError(_CodedError):
    """Notion API returned a 5xx status."""

    _code = ErrorCode.SERVER_ERROR


class Drive2NotionNetworkError(_CodedError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``method``, ``path``.
    """

    _code = ErrorCode.NETWORK_ERROR


# ---------------------------------------------------------------------------
# Emission errors
# ---------------------------------------------------------------------------

class Drive2NotionBatchError(_CodedError):
    """Appending one chunk of blocks failed; later chunks were not sent.

    The target page is left with whatever chunks were appended before the
    failure.  Recovering is up to the caller, typically by re-running the
    whole replace on a later trigger.

    Context keys: ``parent_id``, ``failed_batch`` (0-indexed),
    ``total_batches``, ``batches_sent``, ``blocks_appended``.
    """

    _code = ErrorCode.BATCH_FAILED
