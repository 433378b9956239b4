"""Convert canonical AST nodes to Notion block dicts.

Block mapping rules:

- paragraph -> paragraph
- heading -> heading_1 / heading_2; level 3 and deeper clamp to heading_3
- block_quote -> a single quote block; child paragraphs are joined with
  newline spans, other children contribute the rich text of their first
  mapped block
- block_code -> code block, content verbatim, language from the info string
- list -> one bulleted_list_item / numbered_list_item per item, rich text
  from the item's first paragraph only
- thematic_break -> divider
- table -> one paragraph holding ``cell | cell`` rows separated by newlines
- html_block, definition, footnote_definition -> blank placeholder paragraph

Every block except ``divider`` carries at least one rich-text span; empty
results are padded with a single space.  The mapping never raises.
"""

from __future__ import annotations

from collections.abc import Callable as _Callable

from drive2notion.converter import nodes
from drive2notion.converter.rich_text import (
    blank_span,
    build_rich_text,
    extract_text,
    make_text_span,
    newline_span,
)
from drive2notion.models import ConversionWarning

DEFAULT_CODE_LANGUAGE = "plain text"

_MAX_HEADING_LEVEL = 3

CELL_SEPARATOR = " | "
ROW_SEPARATOR = "\n"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(tokens: list[dict]) -> tuple[list[dict], list[ConversionWarning]]:
    """Convert a document's root node sequence to Notion block dicts.

    Block-level nodes are mapped in order and their blocks concatenated.
    Inline nodes found at the root (malformed input) are skipped.

    Parameters
    ----------
    tokens:
        The root's children, in canonical AST form.

    Returns
    -------
    tuple[list[dict], list[ConversionWarning]]
        (blocks, warnings)
    """
    ctx = _BuildContext()
    for token in tokens:
        token_type = token.get("type", "")
        if token_type in nodes.PHRASING_TYPES:
            ctx.add_warning(
                "ROOT_INLINE_SKIPPED",
                f"Inline node '{token_type}' found at document root was skipped.",
                type=token_type,
            )
            continue
        ctx.blocks.extend(map_block(token, ctx))
    return ctx.blocks, ctx.warnings


class _BuildContext:
    """Mutable accumulator for one document walk."""

    __slots__ = ("blocks", "warnings")

    def __init__(self) -> None:
        self.blocks: list[dict] = []
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


def map_block(token: dict, ctx: _BuildContext) -> list[dict]:
    """Map one block-level node to the block(s) it produces.

    Nodes outside the grammar get the same blank placeholder as the
    unsupported block kinds, so the mapping is total.
    """
    token_type = token.get("type", "")
    handler = _BLOCK_HANDLERS.get(token_type, _build_placeholder)
    return handler(token, ctx)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_block(block_type: str, rich_text: list[dict], **payload: object) -> dict:
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": rich_text or [blank_span()], **payload},
    }


def _inline(token: dict, ctx: _BuildContext) -> list[dict]:
    return build_rich_text(token.get("children", []), warnings=ctx.warnings)


def primary_rich_text(block: dict) -> list[dict] | None:
    """Return the ``rich_text`` list of *block*, or ``None`` if it has none."""
    payload = block.get(block.get("type", ""), {})
    return payload.get("rich_text")


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_paragraph(token: dict, ctx: _BuildContext) -> list[dict]:
    return [_make_block("paragraph", _inline(token, ctx))]


def _build_heading(token: dict, ctx: _BuildContext) -> list[dict]:
    level = token.get("attrs", {}).get("level", 1)
    heading_type = f"heading_{max(1, min(level, _MAX_HEADING_LEVEL))}"
    return [_make_block(heading_type, _inline(token, ctx))]


def _build_block_quote(token: dict, ctx: _BuildContext) -> list[dict]:
    """Flatten a blockquote into one quote block.

    Nested structure is lost on purpose: a non-paragraph child keeps only
    the rich text of its first mapped block, and its wrapper is discarded.
    """
    parts: list[list[dict]] = []
    for child in token.get("children", []):
        if child.get("type") == nodes.PARAGRAPH:
            parts.append(_inline(child, ctx))
            continue
        child_blocks = map_block(child, ctx)
        if not child_blocks:
            continue
        rich_text = primary_rich_text(child_blocks[0])
        if rich_text is not None:
            parts.append(rich_text)

    rich_text: list[dict] = []
    for index, part in enumerate(parts):
        if index:
            rich_text.append(newline_span())
        rich_text.extend(part)

    return [_make_block("quote", rich_text)]


def _code_language(info: str | None) -> str:
    """First word of the fence info string, as the language name."""
    if not info or not info.strip():
        return DEFAULT_CODE_LANGUAGE
    return info.split()[0]


def _build_code_block(token: dict, ctx: _BuildContext) -> list[dict]:
    language = _code_language(token.get("attrs", {}).get("info"))
    return [_make_block(
        "code",
        [make_text_span(token.get("raw", ""))],
        language=language,
    )]


def _build_list(token: dict, ctx: _BuildContext) -> list[dict]:
    """One flat list-item block per item; nested lists are not descended."""
    ordered = bool(token.get("attrs", {}).get("ordered", False))
    return [
        _build_list_item(item, ctx, ordered=ordered)
        for item in token.get("children", [])
    ]


def _build_list_item(
    token: dict,
    ctx: _BuildContext,
    ordered: bool = False,
) -> dict:
    block_type = "numbered_list_item" if ordered else "bulleted_list_item"
    children = token.get("children", [])

    rich_text: list[dict] = []
    if children and children[0].get("type") == nodes.PARAGRAPH:
        rich_text = _inline(children[0], ctx)
        dropped = children[1:]
    else:
        dropped = children

    if dropped:
        ctx.add_warning(
            "LIST_ITEM_TRUNCATED",
            f"List item content after the first paragraph was dropped "
            f"({len(dropped)} node(s)).",
            dropped=[child.get("type", "") for child in dropped],
        )

    return _make_block(block_type, rich_text)


def _build_bare_list_item(token: dict, ctx: _BuildContext) -> list[dict]:
    return [_build_list_item(token, ctx)]


def _build_divider(token: dict, ctx: _BuildContext) -> list[dict]:
    return [{
        "object": "block",
        "type": "divider",
        "divider": {},
    }]


def _build_table(token: dict, ctx: _BuildContext) -> list[dict]:
    """Flatten a table into a single plain-text paragraph.

    Notion's native table needs ``table`` + ``table_row`` children; that
    structure is not produced here.
    """
    rows = [
        CELL_SEPARATOR.join(
            extract_text(cell.get("children", []))
            for cell in row.get("children", [])
        )
        for row in token.get("children", [])
    ]
    content = ROW_SEPARATOR.join(rows) or " "
    return [_make_block("paragraph", [make_text_span(content)])]


def _build_placeholder(token: dict, ctx: _BuildContext) -> list[dict]:
    token_type = token.get("type", "")
    ctx.add_warning(
        "UNSUPPORTED_BLOCK",
        f"Block '{token_type}' has no Notion equivalent; "
        "a blank paragraph was emitted in its place.",
        type=token_type,
    )
    return [_make_block("paragraph", [])]


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = _Callable[[dict, _BuildContext], list[dict]]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    nodes.PARAGRAPH: _build_paragraph,
    nodes.HEADING: _build_heading,
    nodes.BLOCK_QUOTE: _build_block_quote,
    nodes.BLOCK_CODE: _build_code_block,
    nodes.LIST: _build_list,
    nodes.LIST_ITEM: _build_bare_list_item,
    nodes.THEMATIC_BREAK: _build_divider,
    nodes.TABLE: _build_table,
    nodes.HTML_BLOCK: _build_placeholder,
    nodes.DEFINITION: _build_placeholder,
    nodes.FOOTNOTE_DEFINITION: _build_placeholder,
}
