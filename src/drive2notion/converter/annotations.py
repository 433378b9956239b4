"""Notion rich-text annotation records.

An annotation record is a plain dict::

    {"bold": False, "italic": False, "strikethrough": False,
     "underline": False, "code": False, "color": "default"}

:data:`DEFAULT_ANNOTATIONS` is read-only.  Every span gets its own copy
from :func:`default_annotations`, and :func:`merge_annotations` always
returns a new dict, so overriding one flag never leaks into a sibling span.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DEFAULT_ANNOTATIONS: Mapping[str, bool | str] = MappingProxyType({
    "bold": False,
    "italic": False,
    "strikethrough": False,
    "underline": False,
    "code": False,
    "color": "default",
})

ANNOTATION_FLAGS: tuple[str, ...] = (
    "bold", "italic", "strikethrough", "underline", "code",
)


def default_annotations() -> dict:
    """Return a fresh, unshared copy of :data:`DEFAULT_ANNOTATIONS`."""
    return dict(DEFAULT_ANNOTATIONS)


def merge_annotations(base: Mapping, **overrides: bool) -> dict:
    """Merge flag overrides into a copy of *base*.

    Flags are OR-merged: once ``True`` a flag stays ``True``.  Keys that are
    not boolean flags (``color``) or not present in *base* are ignored.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if key in ANNOTATION_FLAGS and key in merged:
            merged[key] = bool(merged[key]) or bool(value)
    return merged
