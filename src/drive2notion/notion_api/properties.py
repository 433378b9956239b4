"""Builders for Notion database property values.

A synced page carries three properties: its title, the source file key
(rich text) and the source modification marker (date).  The marker is an
opaque string handed to Notion as-is.
"""

from __future__ import annotations

from typing import Any


def title_property(text: str) -> dict[str, Any]:
    return {"title": [{"type": "text", "text": {"content": text}}]}


def rich_text_property(text: str) -> dict[str, Any]:
    return {"rich_text": [{"type": "text", "text": {"content": text}}]}


def date_property(start: str) -> dict[str, Any]:
    """Date property whose ``start`` is *start*, unparsed."""
    return {"date": {"start": start}}
