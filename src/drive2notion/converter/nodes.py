"""Canonical Markdown AST grammar.

The converter works on plain ``dict`` nodes.  Every node has a ``"type"``
key drawn from one of the closed sets below; leaves carry their payload in
``"raw"``, attributes live in ``"attrs"`` and children in ``"children"``::

    {"type": "heading", "attrs": {"level": 2},
     "children": [{"type": "text", "raw": "Intro"}]}

:class:`~drive2notion.converter.ast_normalizer.ASTNormalizer` produces this
shape from Markdown text, but any producer that follows the grammar can
feed :func:`~drive2notion.converter.block_builder.build_blocks` directly.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Block level
# ---------------------------------------------------------------------------

PARAGRAPH = "paragraph"
HEADING = "heading"
BLOCK_QUOTE = "block_quote"
BLOCK_CODE = "block_code"
LIST = "list"
LIST_ITEM = "list_item"
THEMATIC_BREAK = "thematic_break"
TABLE = "table"
TABLE_ROW = "table_row"
TABLE_CELL = "table_cell"
HTML_BLOCK = "html_block"
DEFINITION = "definition"
FOOTNOTE_DEFINITION = "footnote_definition"

UNSUPPORTED_BLOCK_TYPES: frozenset[str] = frozenset({
    HTML_BLOCK,
    DEFINITION,
    FOOTNOTE_DEFINITION,
})
"""Block kinds Notion cannot hold; each becomes a blank placeholder."""

BLOCK_TYPES: frozenset[str] = frozenset({
    PARAGRAPH,
    HEADING,
    BLOCK_QUOTE,
    BLOCK_CODE,
    LIST,
    LIST_ITEM,
    THEMATIC_BREAK,
    TABLE,
}) | UNSUPPORTED_BLOCK_TYPES

# ---------------------------------------------------------------------------
# Phrasing (inline) level
# ---------------------------------------------------------------------------

TEXT = "text"
STRONG = "strong"
EMPHASIS = "emphasis"
STRIKETHROUGH = "strikethrough"
CODESPAN = "codespan"
LINK = "link"
LINEBREAK = "linebreak"
IMAGE = "image"
IMAGE_REFERENCE = "image_reference"
LINK_REFERENCE = "link_reference"
FOOTNOTE_REF = "footnote_ref"
HTML_INLINE = "html_inline"

IGNORED_PHRASING_TYPES: frozenset[str] = frozenset({
    IMAGE,
    IMAGE_REFERENCE,
    LINK_REFERENCE,
    FOOTNOTE_REF,
    HTML_INLINE,
})
"""Inline kinds that contribute no rich text and are dropped."""

PHRASING_TYPES: frozenset[str] = frozenset({
    TEXT,
    STRONG,
    EMPHASIS,
    STRIKETHROUGH,
    CODESPAN,
    LINK,
    LINEBREAK,
}) | IGNORED_PHRASING_TYPES

WRAPPER_FLAGS: dict[str, str] = {
    STRONG: "bold",
    EMPHASIS: "italic",
    STRIKETHROUGH: "strikethrough",
}
"""Formatting wrappers and the annotation flag each one forces on."""
