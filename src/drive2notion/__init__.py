"""drive2notion -- Markdown-to-Notion block conversion and page sync.

Public re-exports
-----------------

* **Clients:** :class:`Drive2NotionClient`, :class:`AsyncDrive2NotionClient`
* **Conversion:** :class:`MarkdownToNotionConverter`
* **Configuration:** :class:`Drive2NotionConfig`
* **Errors:** Every :class:`Drive2NotionError` subclass and :class:`ErrorCode`
* **Models:** All result dataclasses

Usage::

    from drive2notion import Drive2NotionClient

    client = Drive2NotionClient(token="secret_xxx")
    blocks = client.convert("# Hello\\n\\nWorld").blocks
"""

from __future__ import annotations

from drive2notion.async_client import AsyncDrive2NotionClient

# ── Clients ────────────────────────────────────────────────────────────
from drive2notion.client import Drive2NotionClient

# ── Configuration ───────────────────────────────────────────────────────
from drive2notion.config import MAX_BLOCKS_PER_REQUEST, Drive2NotionConfig

# ── Conversion ─────────────────────────────────────────────────────────
from drive2notion.converter import MarkdownToNotionConverter

# ── Errors ──────────────────────────────────────────────────────────────
from drive2notion.errors import (
    Drive2NotionAuthError,
    Drive2NotionBatchError,
    Drive2NotionConflictError,
    Drive2NotionError,
    Drive2NotionNetworkError,
    Drive2NotionNotFoundError,
    Drive2NotionPermissionError,
    Drive2NotionRateLimitError,
    Drive2NotionServerError,
    Drive2NotionValidationError,
    ErrorCode,
)

# ── Models ──────────────────────────────────────────────────────────────
from drive2notion.models import (
    ConversionResult,
    ConversionWarning,
    EmitResult,
    PageCreateResult,
    ReplaceResult,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Clients
    "Drive2NotionClient",
    "AsyncDrive2NotionClient",
    # Conversion
    "MarkdownToNotionConverter",
    # Configuration
    "Drive2NotionConfig",
    "MAX_BLOCKS_PER_REQUEST",
    # Error base + code enum
    "Drive2NotionError",
    "ErrorCode",
    # API / transport errors
    "Drive2NotionValidationError",
    "Drive2NotionAuthError",
    "Drive2NotionPermissionError",
    "Drive2NotionNotFoundError",
    "Drive2NotionConflictError",
    "Drive2NotionRateLimitError",
    "Drive2NotionServerError",
    "Drive2NotionNetworkError",
    # Emission errors
    "Drive2NotionBatchError",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "EmitResult",
    "PageCreateResult",
    "ReplaceResult",
]
