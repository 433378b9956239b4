"""Build Notion rich_text arrays from canonical inline AST nodes.

A rich_text span always has the full shape::

    {
        "type": "text",
        "text": {"content": "hello", "link": {"url": "https://..."} | None},
        "annotations": {"bold": false, "italic": false, "strikethrough": false,
                        "underline": false, "code": false, "color": "default"}
    }

Nested formatting is flattened by recursive descent: wrappers thread an
annotation accumulator (and the inherited link) down to the leaves, so the
resulting spans appear in source order and each one owns its annotations.
"""

from __future__ import annotations

from collections.abc import Mapping

from drive2notion.converter import nodes
from drive2notion.converter.annotations import default_annotations, merge_annotations
from drive2notion.models import ConversionWarning


# ---------------------------------------------------------------------------
# Span construction
# ---------------------------------------------------------------------------

def make_text_span(
    content: str,
    annotations: Mapping | None = None,
    link: str | None = None,
) -> dict:
    """Create a single Notion rich_text span.

    *annotations* is copied, never stored by reference.
    """
    return {
        "type": "text",
        "text": {
            "content": content,
            "link": {"url": link} if link is not None else None,
        },
        "annotations": dict(annotations) if annotations is not None else default_annotations(),
    }


def blank_span() -> dict:
    """A single-space span with default annotations, used as padding."""
    return make_text_span(" ")


def newline_span() -> dict:
    return make_text_span("\n")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_rich_text(
    children: list[dict],
    *,
    annotations: Mapping | None = None,
    link: str | None = None,
    warnings: list[ConversionWarning] | None = None,
) -> list[dict]:
    """Convert inline AST nodes to a flat Notion rich_text array.

    Parameters
    ----------
    children:
        Canonical phrasing nodes (see :mod:`drive2notion.converter.nodes`).
    annotations:
        Annotations inherited from enclosing wrappers.  Defaults to
        all-false.
    link:
        URL inherited from an enclosing ``link`` node.
    warnings:
        Optional list collecting an ``INLINE_DROPPED`` warning for every
        inline node that produced no span.

    Returns
    -------
    list[dict]
        Spans in source order.  Empty when nothing renderable was found.
    """
    if annotations is None:
        annotations = default_annotations()

    spans: list[dict] = []

    for node in children:
        node_type = node.get("type", "")

        if node_type == nodes.TEXT:
            spans.append(make_text_span(node.get("raw", ""), annotations, link))

        elif node_type in nodes.WRAPPER_FLAGS:
            flag = nodes.WRAPPER_FLAGS[node_type]
            spans.extend(build_rich_text(
                node.get("children", []),
                annotations=merge_annotations(annotations, **{flag: True}),
                link=link,
                warnings=warnings,
            ))

        elif node_type == nodes.CODESPAN:
            spans.append(make_text_span(
                node.get("raw", ""),
                merge_annotations(annotations, code=True),
                link,
            ))

        elif node_type == nodes.LINK:
            # An enclosing link keeps precedence over a nested one.
            url = link if link is not None else node.get("attrs", {}).get("url", "")
            spans.extend(build_rich_text(
                node.get("children", []),
                annotations=annotations,
                link=url,
                warnings=warnings,
            ))

        elif node_type == nodes.LINEBREAK:
            spans.append(make_text_span("\n", annotations, link))

        elif warnings is not None:
            warnings.append(ConversionWarning(
                code="INLINE_DROPPED",
                message=f"Inline node '{node_type}' has no rich-text form and was dropped.",
                context={"type": node_type},
            ))

    return spans


def extract_text(children: list[dict]) -> str:
    """Flatten inline AST nodes to plain text, discarding all formatting.

    ``text`` and ``codespan`` contribute their value, wrappers and links
    contribute their children's text, ``linebreak`` contributes ``"\\n"``;
    every other kind contributes nothing.
    """
    parts: list[str] = []
    for node in children:
        node_type = node.get("type", "")
        if node_type in (nodes.TEXT, nodes.CODESPAN):
            parts.append(node.get("raw", ""))
        elif node_type in nodes.WRAPPER_FLAGS or node_type == nodes.LINK:
            parts.append(extract_text(node.get("children", [])))
        elif node_type == nodes.LINEBREAK:
            parts.append("\n")
    return "".join(parts)
