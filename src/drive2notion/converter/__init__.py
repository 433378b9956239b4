"""Markdown to Notion block conversion.

Public API:

- :class:`MarkdownToNotionConverter`: Markdown text to Notion blocks.
- :class:`ASTNormalizer`: parse Markdown into the canonical AST.
- :func:`build_blocks`: canonical AST to Notion block dicts.
- :func:`build_rich_text`: inline nodes to a rich_text array.
- :func:`extract_text`: inline nodes to plain text.
"""

from drive2notion.converter.ast_normalizer import ASTNormalizer
from drive2notion.converter.block_builder import build_blocks
from drive2notion.converter.md_to_notion import MarkdownToNotionConverter
from drive2notion.converter.rich_text import build_rich_text, extract_text

__all__ = [
    "ASTNormalizer",
    "MarkdownToNotionConverter",
    "build_blocks",
    "build_rich_text",
    "extract_text",
]
