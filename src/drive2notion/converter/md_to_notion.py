"""Full Markdown-to-Notion conversion pipeline.

:class:`MarkdownToNotionConverter` runs two stages:

1. **Parse & normalize**: :class:`ASTNormalizer` turns Markdown into the
   canonical AST.
2. **Build**: :func:`build_blocks` walks the root in order and maps each
   block-level node to Notion block dicts.

The result is a :class:`ConversionResult` with the blocks and any lossy
conversion warnings.  Conversion is deterministic and performs no I/O
beyond the optional debug dumps.
"""

from __future__ import annotations

import json
import sys

from drive2notion.config import Drive2NotionConfig
from drive2notion.converter.ast_normalizer import ASTNormalizer
from drive2notion.converter.block_builder import build_blocks
from drive2notion.models import ConversionResult
from drive2notion.observability import NoopMetricsHook
from drive2notion.utils.redact import redact


class MarkdownToNotionConverter:
    """Convert Markdown text to Notion API block payloads.

    Parameters
    ----------
    config:
        Package configuration; only the debug and metrics settings affect
        conversion.

    Examples
    --------
    >>> converter = MarkdownToNotionConverter(Drive2NotionConfig())
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [block["type"] for block in result.blocks]
    ['heading_1', 'paragraph']
    """

    def __init__(self, config: Drive2NotionConfig) -> None:
        self._config = config
        self._normalizer = ASTNormalizer()
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def convert(self, markdown: str) -> ConversionResult:
        """Parse *markdown* and build its Notion blocks."""
        tokens = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[drive2notion] Normalized AST:",
                json.dumps(tokens, indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        blocks, warnings = build_blocks(tokens)

        if warnings:
            self._metrics.increment(
                "drive2notion.conversion_warnings_total", len(warnings),
            )

        if self._config.debug_dump_payload:
            safe = redact({"blocks": blocks}, self._config.token)
            print(
                "[drive2notion] Notion blocks payload:",
                json.dumps(safe["blocks"], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return ConversionResult(blocks=blocks, warnings=warnings)
