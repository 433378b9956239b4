"""Parse Markdown and normalize it to the canonical AST.

This module wraps mistune v3's AST renderer and rewrites the raw token
stream into the closed grammar declared in
:mod:`drive2notion.converter.nodes`:

* ``block_text`` (tight list content) becomes ``paragraph``.
* ``block_html`` becomes ``html_block``; ``inline_html`` becomes
  ``html_inline``.
* A table's header cells become its first ``table_row``.
* Link reference definitions and footnote definitions become
  ``definition`` / ``footnote_definition`` nodes at the position they were
  written.  mistune itself only records them in ``state.env``, so the two
  block rules are wrapped to leave a token behind.
* ``softbreak`` becomes a ``"\\n"`` text node, and adjacent text nodes are
  merged, so soft line endings live inside text values.
* ``blank_line``, the trailing ``footnotes`` section and unknown tokens are
  dropped.
"""

from __future__ import annotations

from re import Match

import mistune
from mistune.plugins.footnotes import parse_footnote_item, parse_ref_footnote
from mistune.util import unikey

from drive2notion.converter import nodes

# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_BLOCK_TYPE_MAP: dict[str, str] = {
    "heading": nodes.HEADING,
    "paragraph": nodes.PARAGRAPH,
    "block_text": nodes.PARAGRAPH,
    "block_quote": nodes.BLOCK_QUOTE,
    "list": nodes.LIST,
    "list_item": nodes.LIST_ITEM,
    "thematic_break": nodes.THEMATIC_BREAK,
    "footnote_definition": nodes.FOOTNOTE_DEFINITION,
}

_INLINE_TYPE_MAP: dict[str, str] = {
    "strong": nodes.STRONG,
    "emphasis": nodes.EMPHASIS,
    "strikethrough": nodes.STRIKETHROUGH,
    "link": nodes.LINK,
    "image": nodes.IMAGE,
}

_RAW_LEAF_TYPE_MAP: dict[str, str] = {
    "text": nodes.TEXT,
    "codespan": nodes.CODESPAN,
    "block_html": nodes.HTML_BLOCK,
    "inline_html": nodes.HTML_INLINE,
    "footnote_ref": nodes.FOOTNOTE_REF,
    "definition": nodes.DEFINITION,
}


# ---------------------------------------------------------------------------
# Block rules that keep definitions in place
# ---------------------------------------------------------------------------

def _parse_definition(
    block: mistune.BlockParser, m: Match[str], state: mistune.BlockState
) -> int | None:
    """Run mistune's ``ref_link`` rule and record a ``definition`` token."""
    last = state.last_token()
    # a reference definition cannot interrupt a paragraph
    continues_paragraph = last is not None and last["type"] == "paragraph"
    end_pos = block.parse_ref_link(m, state)
    if end_pos and not continues_paragraph:
        state.append_token({
            "type": "definition",
            "raw": state.src[m.start():end_pos],
            "attrs": {"label": m.group("reflink_1")},
        })
    return end_pos


def _parse_footnote_definition(
    block: mistune.BlockParser, m: Match[str], state: mistune.BlockState
) -> int:
    """Run the footnotes plugin's definition rule and record the definition."""
    end_pos = parse_ref_footnote(block, m, state)
    key = unikey(m.group("footnote_key"))
    item = parse_footnote_item(block, key, 0, state)
    state.append_token({
        "type": "footnote_definition",
        "attrs": {"key": key},
        "children": item["children"],
    })
    return end_pos


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST nodes."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=[
                "strikethrough",
                "table",
                "url",
                "footnotes",
            ],
        )
        self._parser.block.register("ref_link", None, _parse_definition)
        self._parser.block.register("ref_footnote", None, _parse_footnote_definition)

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return the root's normalized children."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        result: list[dict] = []
        for token in tokens:
            for normalized in self._normalize_token(token):
                _append_merging_text(result, normalized)
        return result

    def _normalize_token(self, token: dict) -> list[dict]:
        """Normalize one mistune token into zero or more canonical nodes."""
        raw_type = token.get("type", "")

        if raw_type == "footnotes":
            # already emitted where each definition was written
            return []

        if raw_type == "block_code":
            return [self._normalize_code(token)]

        if raw_type == "table":
            return [self._normalize_table(token)]

        if raw_type == "softbreak":
            return [{"type": nodes.TEXT, "raw": "\n"}]

        if raw_type == "linebreak":
            return [{"type": nodes.LINEBREAK}]

        if raw_type in _RAW_LEAF_TYPE_MAP:
            leaf: dict = {"type": _RAW_LEAF_TYPE_MAP[raw_type], "raw": token.get("raw", "")}
            if token.get("attrs"):
                leaf["attrs"] = dict(token["attrs"])
            return [leaf]

        canonical = _BLOCK_TYPE_MAP.get(raw_type) or _INLINE_TYPE_MAP.get(raw_type)
        if canonical is None:
            # blank_line and anything unknown
            return []
        return [self._normalize_container(token, canonical)]

    def _normalize_container(self, token: dict, canonical_type: str) -> dict:
        result: dict = {"type": canonical_type}
        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)
        if canonical_type == nodes.THEMATIC_BREAK:
            return result
        result["children"] = self._normalize_tokens(token.get("children", []))
        return result

    def _normalize_code(self, token: dict) -> dict:
        raw_code = token.get("raw", "")
        # mistune keeps the newline before the closing fence
        if raw_code.endswith("\n"):
            raw_code = raw_code[:-1]
        result: dict = {"type": nodes.BLOCK_CODE, "raw": raw_code}
        info = (token.get("attrs") or {}).get("info")
        if info:
            result["attrs"] = {"info": info}
        return result

    def _normalize_table(self, token: dict) -> dict:
        """Flatten mistune's head/body split into an ordered row list."""
        rows: list[dict] = []
        for part in token.get("children", []):
            part_type = part.get("type", "")
            if part_type == "table_head":
                rows.append(self._normalize_row(part))
            elif part_type == "table_body":
                rows.extend(
                    self._normalize_row(row)
                    for row in part.get("children", [])
                    if row.get("type") == "table_row"
                )
        return {"type": nodes.TABLE, "children": rows}

    def _normalize_row(self, token: dict) -> dict:
        return {
            "type": nodes.TABLE_ROW,
            "children": [
                {
                    "type": nodes.TABLE_CELL,
                    "children": self._normalize_tokens(cell.get("children", [])),
                }
                for cell in token.get("children", [])
                if cell.get("type") == "table_cell"
            ],
        }


def _append_merging_text(result: list[dict], node: dict) -> None:
    """Append *node*, folding it into a preceding plain text node."""
    if (
        node["type"] == nodes.TEXT
        and result
        and result[-1]["type"] == nodes.TEXT
        and "attrs" not in result[-1]
    ):
        result[-1] = {"type": nodes.TEXT, "raw": result[-1]["raw"] + node["raw"]}
        return
    result.append(node)
