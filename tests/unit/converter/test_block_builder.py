"""Tests for drive2notion.converter.block_builder.

Every test feeds hand-built canonical AST nodes to :func:`build_blocks`.
"""

from __future__ import annotations

import copy

import pytest

from drive2notion.converter import nodes
from drive2notion.converter.block_builder import (
    _BLOCK_HANDLERS,
    build_blocks,
    primary_rich_text,
)
from drive2notion.converter.rich_text import build_rich_text, newline_span

# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def text(value: str) -> dict:
    return {"type": "text", "raw": value}


def para(*children: dict) -> dict:
    return {"type": "paragraph", "children": list(children)}


def heading(level: int, value: str) -> dict:
    return {"type": "heading", "attrs": {"level": level}, "children": [text(value)]}


def item(*children: dict) -> dict:
    return {"type": "list_item", "children": list(children)}


def make_list(*items: dict, ordered: bool = False) -> dict:
    return {"type": "list", "attrs": {"ordered": ordered}, "children": list(items)}


def quote(*children: dict) -> dict:
    return {"type": "block_quote", "children": list(children)}


def table(*rows: list[str]) -> dict:
    return {
        "type": "table",
        "children": [
            {
                "type": "table_row",
                "children": [
                    {"type": "table_cell", "children": [text(cell)] if cell else []}
                    for cell in row
                ],
            }
            for row in rows
        ],
    }


def contents(block: dict) -> list[str]:
    return [span["text"]["content"] for span in primary_rich_text(block)]


def convert(*tokens: dict) -> list[dict]:
    blocks, _ = build_blocks(list(tokens))
    return blocks


# ---------------------------------------------------------------------------
# Paragraphs and headings
# ---------------------------------------------------------------------------

class TestParagraph:
    def test_basic(self):
        blocks = convert(para(text("Hello")))
        assert blocks == [{
            "object": "block",
            "type": "paragraph",
            "paragraph": {"rich_text": build_rich_text([text("Hello")])},
        }]

    def test_empty_paragraph_padded(self):
        (block,) = convert(para())
        assert contents(block) == [" "]

    def test_paragraph_of_only_images_padded(self):
        image = {"type": "image", "attrs": {"url": "x.png"}, "children": [text("alt")]}
        blocks, warnings = build_blocks([para(image)])
        assert contents(blocks[0]) == [" "]
        assert [w.code for w in warnings] == ["INLINE_DROPPED"]


class TestHeading:
    @pytest.mark.parametrize(("level", "expected"), [(1, "heading_1"), (2, "heading_2"), (3, "heading_3")])
    def test_levels(self, level, expected):
        (block,) = convert(heading(level, "T"))
        assert block["type"] == expected
        assert contents(block) == ["T"]

    @pytest.mark.parametrize("level", [4, 5, 6])
    def test_deep_levels_clamp_to_heading_3(self, level):
        (block,) = convert(heading(level, "T"))
        assert block["type"] == "heading_3"

    def test_empty_heading_padded(self):
        (block,) = convert({"type": "heading", "attrs": {"level": 2}, "children": []})
        assert contents(block) == [" "]


# ---------------------------------------------------------------------------
# Blockquote
# ---------------------------------------------------------------------------

class TestBlockQuote:
    def test_two_paragraphs_joined_by_newline_span(self):
        (block,) = convert(quote(para(text("A")), para(text("B"))))
        assert block["type"] == "quote"
        assert primary_rich_text(block) == (
            build_rich_text([text("A")]) + [newline_span()] + build_rich_text([text("B")])
        )

    def test_single_paragraph_has_no_trailing_newline(self):
        (block,) = convert(quote(para(text("A"))))
        assert contents(block) == ["A"]

    def test_empty_quote_padded(self):
        (block,) = convert(quote())
        assert contents(block) == [" "]

    def test_non_paragraph_child_contributes_first_block_spans(self):
        (block,) = convert(quote(
            para(text("A")),
            make_list(item(para(text("one"))), item(para(text("two")))),
        ))
        assert contents(block) == ["A", "\n", "one"]

    def test_nested_quote_is_flattened(self):
        (block,) = convert(quote(quote(para(text("inner")))))
        assert block["type"] == "quote"
        assert contents(block) == ["inner"]

    def test_divider_child_contributes_nothing(self):
        (block,) = convert(quote(para(text("A")), {"type": "thematic_break"}, para(text("B"))))
        assert contents(block) == ["A", "\n", "B"]

    def test_formatting_survives(self):
        (block,) = convert(quote(para({"type": "strong", "children": [text("b")]})))
        assert primary_rich_text(block)[0]["annotations"]["bold"] is True


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------

class TestCodeBlock:
    def test_language_and_verbatim_content(self):
        source = "def f():\n    return **1**"
        (block,) = convert({"type": "block_code", "raw": source, "attrs": {"info": "python"}})
        assert block["type"] == "code"
        assert block["code"]["language"] == "python"
        assert contents(block) == [source]
        assert block["code"]["rich_text"][0]["annotations"]["bold"] is False

    def test_missing_language_defaults_to_plain_text(self):
        (block,) = convert({"type": "block_code", "raw": "x"})
        assert block["code"]["language"] == "plain text"

    def test_blank_info_defaults_to_plain_text(self):
        (block,) = convert({"type": "block_code", "raw": "x", "attrs": {"info": "   "}})
        assert block["code"]["language"] == "plain text"

    def test_info_string_uses_first_word(self):
        (block,) = convert({"type": "block_code", "raw": "x", "attrs": {"info": "js title=a.js"}})
        assert block["code"]["language"] == "js"

    def test_empty_code_still_has_span(self):
        (block,) = convert({"type": "block_code", "raw": ""})
        assert len(primary_rich_text(block)) == 1


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestList:
    def test_bulleted(self):
        blocks = convert(make_list(item(para(text("a"))), item(para(text("b")))))
        assert [b["type"] for b in blocks] == ["bulleted_list_item"] * 2
        assert [contents(b) for b in blocks] == [["a"], ["b"]]

    def test_numbered(self):
        blocks = convert(make_list(item(para(text("a"))), ordered=True))
        assert blocks[0]["type"] == "numbered_list_item"

    def test_only_first_paragraph_is_used(self):
        blocks, warnings = build_blocks([
            make_list(item(para(text("first")), para(text("second")))),
        ])
        assert len(blocks) == 1
        assert contents(blocks[0]) == ["first"]
        assert [w.code for w in warnings] == ["LIST_ITEM_TRUNCATED"]

    def test_nested_list_is_not_descended(self):
        blocks = convert(make_list(
            item(para(text("outer")), make_list(item(para(text("inner"))))),
        ))
        assert len(blocks) == 1
        assert contents(blocks[0]) == ["outer"]

    def test_item_starting_with_non_paragraph_is_padded(self):
        blocks = convert(make_list(item({"type": "block_code", "raw": "x"})))
        assert contents(blocks[0]) == [" "]

    def test_empty_item_padded(self):
        blocks, warnings = build_blocks([make_list(item())])
        assert contents(blocks[0]) == [" "]
        assert warnings == []

    def test_empty_list_yields_nothing(self):
        assert convert(make_list()) == []

    def test_bare_list_item_is_bulleted(self):
        (block,) = convert(item(para(text("x"))))
        assert block["type"] == "bulleted_list_item"


# ---------------------------------------------------------------------------
# Divider, table, placeholders
# ---------------------------------------------------------------------------

class TestDivider:
    def test_divider_has_empty_payload(self):
        assert convert({"type": "thematic_break"}) == [
            {"object": "block", "type": "divider", "divider": {}},
        ]


class TestTable:
    def test_two_by_two(self):
        (block,) = convert(table(["a", "b"], ["c", "d"]))
        assert block["type"] == "paragraph"
        assert contents(block) == ["a | b\nc | d"]

    def test_cell_formatting_is_discarded(self):
        tok = table(["x"])
        tok["children"][0]["children"][0]["children"] = [
            {"type": "strong", "children": [text("bold")]},
            {"type": "codespan", "raw": "code"},
        ]
        (block,) = convert(tok)
        assert contents(block) == ["boldcode"]
        assert primary_rich_text(block)[0]["annotations"]["bold"] is False

    def test_empty_table_is_single_space(self):
        (block,) = convert({"type": "table", "children": []})
        assert contents(block) == [" "]

    def test_empty_cells_keep_separators(self):
        (block,) = convert(table(["", "b"]))
        assert contents(block) == [" | b"]


class TestPlaceholders:
    @pytest.mark.parametrize("kind", sorted(nodes.UNSUPPORTED_BLOCK_TYPES))
    def test_unsupported_block_keeps_position(self, kind):
        blocks, warnings = build_blocks([
            para(text("before")),
            {"type": kind, "raw": "<div>x</div>", "children": []},
            para(text("after")),
        ])
        assert [b["type"] for b in blocks] == ["paragraph"] * 3
        assert contents(blocks[1]) == [" "]
        assert [w.code for w in warnings] == ["UNSUPPORTED_BLOCK"]
        assert warnings[0].context == {"type": kind}

    def test_unknown_block_kind_gets_placeholder(self):
        blocks, warnings = build_blocks([{"type": "mystery"}])
        assert contents(blocks[0]) == [" "]
        assert warnings[0].code == "UNSUPPORTED_BLOCK"


# ---------------------------------------------------------------------------
# Document walker
# ---------------------------------------------------------------------------

class TestBuildBlocks:
    def test_order_is_preserved(self):
        blocks = convert(
            heading(1, "Title"),
            para(text("p")),
            {"type": "thematic_break"},
            make_list(item(para(text("i")))),
        )
        assert [b["type"] for b in blocks] == [
            "heading_1", "paragraph", "divider", "bulleted_list_item",
        ]

    def test_root_inline_nodes_are_skipped(self):
        blocks, warnings = build_blocks([text("stray"), para(text("ok")), {"type": "strong", "children": []}])
        assert [contents(b) for b in blocks] == [["ok"]]
        assert [w.code for w in warnings] == ["ROOT_INLINE_SKIPPED"] * 2

    def test_empty_document(self):
        assert build_blocks([]) == ([], [])

    def test_input_is_not_mutated(self):
        doc = [quote(para(text("A"))), table(["a"]), make_list(item(para(text("b"))))]
        snapshot = copy.deepcopy(doc)
        build_blocks(doc)
        assert doc == snapshot

    def test_deterministic(self):
        doc = [heading(2, "h"), quote(para(text("q"))), table(["a", "b"])]
        assert build_blocks(doc) == build_blocks(doc)

    def test_every_non_divider_block_has_spans(self):
        doc = [
            para(), heading(5, ""), quote(), {"type": "block_code", "raw": ""},
            make_list(item()), {"type": "thematic_break"}, table(),
            {"type": "html_block", "raw": ""},
        ]
        for block in convert(*doc):
            if block["type"] != "divider":
                assert len(primary_rich_text(block)) >= 1

    def test_dispatch_covers_every_block_kind(self):
        assert set(_BLOCK_HANDLERS) == set(nodes.BLOCK_TYPES)
