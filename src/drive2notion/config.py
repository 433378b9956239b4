"""Configuration for drive2notion.

:class:`Drive2NotionConfig` is a plain dataclass that captures every
tuneable knob used by the converter, the Notion transport, and the batch
emitter.  Instances are passed to both :class:`Drive2NotionClient` and
:class:`AsyncDrive2NotionClient`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

MAX_BLOCKS_PER_REQUEST = 100
"""Upper bound Notion enforces on ``append_block_children`` payloads."""


@dataclass
class Drive2NotionConfig:
    """Complete configuration for a drive2notion client.

    Every parameter has a sensible default so that the only *required*
    value is ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    batch_size:
        Maximum number of blocks sent per ``append_children`` call.
        Must be between 1 and 100.
    title_property:
        Name of the database title property written on page creation.
    key_property:
        Name of the rich-text property holding the source document key.
    modified_property:
        Name of the date property holding the source modification
        timestamp.  The value is written verbatim and never parsed.
    metrics:
        Optional :class:`~drive2notion.observability.MetricsHook`.
    debug_dump_ast:
        Write the normalized Markdown AST to *stderr* on each conversion.
    debug_dump_payload:
        Write redacted block payloads and HTTP exchanges to *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Emission ────────────────────────────────────────────────────────
    batch_size: int = MAX_BLOCKS_PER_REQUEST

    # ── Database properties ─────────────────────────────────────────────
    title_property: str = "Name"

    key_property: str = "Drive File ID"

    modified_property: str = "Drive Modified"

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if not 1 <= self.batch_size <= MAX_BLOCKS_PER_REQUEST:
            raise ValueError(
                f"batch_size must be between 1 and {MAX_BLOCKS_PER_REQUEST}, "
                f"got {self.batch_size}"
            )

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"Drive2NotionConfig({', '.join(parts)})"
