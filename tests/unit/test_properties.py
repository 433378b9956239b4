"""Property-based tests for drive2notion using Hypothesis.

These tests check invariants of the converter and the chunker over
randomly generated canonical ASTs and Markdown strings.  They complement
the example-based unit tests.
"""

from __future__ import annotations

import copy

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from drive2notion.config import Drive2NotionConfig
from drive2notion.converter.annotations import ANNOTATION_FLAGS, default_annotations
from drive2notion.converter.block_builder import build_blocks, primary_rich_text
from drive2notion.converter.md_to_notion import MarkdownToNotionConverter
from drive2notion.converter.rich_text import build_rich_text, extract_text
from drive2notion.utils.chunk import chunk_blocks

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

_text_values = st.text(max_size=20)

_leaf = st.one_of(
    _text_values.map(lambda v: {"type": "text", "raw": v}),
    _text_values.map(lambda v: {"type": "codespan", "raw": v}),
    st.just({"type": "linebreak"}),
    st.just({"type": "image", "attrs": {"url": "x.png"}, "children": []}),
    st.just({"type": "html_inline", "raw": "<b>"}),
)


def _extend_inline(children):
    return st.one_of(
        st.tuples(st.sampled_from(["strong", "emphasis", "strikethrough"]), children).map(
            lambda t: {"type": t[0], "children": t[1]},
        ),
        children.map(lambda c: {"type": "link", "attrs": {"url": "https://x.test"}, "children": c}),
    )


inline_nodes = st.recursive(_leaf, lambda inner: _extend_inline(st.lists(inner, max_size=4)), max_leaves=12)
inline_lists = st.lists(inline_nodes, max_size=5)

_paragraph = inline_lists.map(lambda c: {"type": "paragraph", "children": c})

_simple_blocks = st.one_of(
    _paragraph,
    st.tuples(st.integers(min_value=1, max_value=6), inline_lists).map(
        lambda t: {"type": "heading", "attrs": {"level": t[0]}, "children": t[1]},
    ),
    st.tuples(_text_values, st.one_of(st.none(), st.sampled_from(["python", "js", ""]))).map(
        lambda t: {"type": "block_code", "raw": t[0], **({"attrs": {"info": t[1]}} if t[1] is not None else {})},
    ),
    st.just({"type": "thematic_break"}),
    st.just({"type": "html_block", "raw": "<div></div>"}),
    st.lists(st.lists(inline_lists, max_size=3), max_size=3).map(
        lambda rows: {
            "type": "table",
            "children": [
                {"type": "table_row", "children": [{"type": "table_cell", "children": c} for c in row]}
                for row in rows
            ],
        },
    ),
)


def _extend_blocks(children):
    return st.one_of(
        children.map(lambda c: {"type": "block_quote", "children": c}),
        st.tuples(st.booleans(), st.lists(children, max_size=3)).map(
            lambda t: {
                "type": "list",
                "attrs": {"ordered": t[0]},
                "children": [{"type": "list_item", "children": c} for c in t[1]],
            },
        ),
    )


block_nodes = st.recursive(_simple_blocks, lambda inner: _extend_blocks(st.lists(inner, max_size=3)), max_leaves=10)
documents = st.lists(st.one_of(block_nodes, inline_nodes), max_size=8)


def _all_spans(blocks):
    for block in blocks:
        spans = primary_rich_text(block)
        if spans:
            yield from spans


# ---------------------------------------------------------------------------
# Converter invariants
# ---------------------------------------------------------------------------

class TestConverterProperties:
    @given(documents)
    @settings(max_examples=150, suppress_health_check=[HealthCheck.too_slow])
    def test_never_raises_and_is_deterministic(self, doc):
        assert build_blocks(doc) == build_blocks(copy.deepcopy(doc))

    @given(documents)
    @settings(max_examples=150, suppress_health_check=[HealthCheck.too_slow])
    def test_non_divider_blocks_have_spans(self, doc):
        blocks, _ = build_blocks(doc)
        for block in blocks:
            if block["type"] == "divider":
                assert block["divider"] == {}
            else:
                assert len(primary_rich_text(block)) >= 1

    @given(documents)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_input_not_mutated(self, doc):
        snapshot = copy.deepcopy(doc)
        build_blocks(doc)
        assert doc == snapshot

    @given(documents)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_spans_have_full_shape_and_own_annotations(self, doc):
        blocks, _ = build_blocks(doc)
        seen: set[int] = set()
        for span in _all_spans(blocks):
            assert set(span["annotations"]) == set(default_annotations())
            assert span["annotations"]["color"] == "default"
            assert span["text"]["link"] is None or set(span["text"]["link"]) == {"url"}
            assert id(span["annotations"]) not in seen
            seen.add(id(span["annotations"]))

    @given(documents)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_heading_levels_are_clamped(self, doc):
        blocks, _ = build_blocks(doc)
        for block in blocks:
            if block["type"].startswith("heading_"):
                assert block["type"] in ("heading_1", "heading_2", "heading_3")


class TestInlineProperties:
    @given(inline_lists, st.sampled_from(["strong", "emphasis", "strikethrough"]))
    def test_wrapping_strengthens_every_span(self, children, kind):
        flag = {"strong": "bold", "emphasis": "italic", "strikethrough": "strikethrough"}[kind]
        plain = build_rich_text(children)
        wrapped = build_rich_text([{"type": kind, "children": children}])
        assert [s["text"] for s in wrapped] == [s["text"] for s in plain]
        for before, after in zip(plain, wrapped):
            assert after["annotations"][flag] is True
            for other in ANNOTATION_FLAGS:
                if before["annotations"][other]:
                    assert after["annotations"][other]

    @given(inline_lists)
    def test_span_text_matches_extracted_text(self, children):
        joined = "".join(s["text"]["content"] for s in build_rich_text(children))
        assert joined == extract_text(children)

    @given(inline_lists)
    def test_link_applies_to_all_spans(self, children):
        spans = build_rich_text([{"type": "link", "attrs": {"url": "https://outer.test"}, "children": children}])
        assert all(s["text"]["link"] == {"url": "https://outer.test"} for s in spans)


class TestMarkdownProperties:
    @given(st.text(max_size=300))
    @settings(max_examples=150, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_arbitrary_markdown_converts(self, markdown):
        result = MarkdownToNotionConverter(Drive2NotionConfig()).convert(markdown)
        for block in result.blocks:
            assert block["object"] == "block"
            if block["type"] != "divider":
                assert primary_rich_text(block)


# ---------------------------------------------------------------------------
# Chunking
# ---------------------------------------------------------------------------

class TestChunkProperties:
    @given(st.lists(st.integers(), max_size=450), st.integers(min_value=1, max_value=100))
    def test_concatenation_restores_input(self, items, size):
        blocks = [{"n": i} for i in items]
        batches = chunk_blocks(blocks, size)
        assert [b for batch in batches for b in batch] == blocks
        assert all(1 <= len(batch) <= size for batch in batches)
        assert all(len(batch) == size for batch in batches[:-1])
