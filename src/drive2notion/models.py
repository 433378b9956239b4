"""Public data models for drive2notion.

Every result type and warning type referenced by the public API surface.
All types are plain dataclasses with no behaviour beyond structural
equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal note recorded while converting Markdown to blocks.

    Warnings never change the produced blocks; they only report where the
    conversion was lossy.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNSUPPORTED_BLOCK"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of the Markdown-to-blocks conversion.

    Attributes
    ----------
    blocks:
        Notion block payloads (dicts) in document order.
    warnings:
        Lossy-conversion notes, in the order they were encountered.
    """

    blocks: list[dict] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------

@dataclass
class EmitResult:
    """Result of sending a block list to Notion in batches.

    Attributes
    ----------
    batches_sent:
        Number of ``append_children`` calls issued.
    blocks_appended:
        Total number of blocks sent across all batches.
    block_ids:
        IDs of the created blocks, in order, as reported by Notion.
    """

    batches_sent: int = 0
    blocks_appended: int = 0
    block_ids: list[str] = field(default_factory=list)


@dataclass
class PageCreateResult:
    """Result of creating a page from Markdown.

    Attributes
    ----------
    page_id:
        The ID of the newly created Notion page.
    url:
        The URL of the newly created page (empty if Notion omitted it).
    blocks_created:
        Total number of blocks appended to the page.
    warnings:
        Conversion warnings for the source document.
    """

    page_id: str
    url: str
    blocks_created: int
    warnings: list[ConversionWarning] = field(default_factory=list)


@dataclass
class ReplaceResult:
    """Result of replacing a page's content from Markdown.

    Attributes
    ----------
    page_id:
        The page whose children were replaced.
    blocks_deleted:
        Number of pre-existing child blocks deleted.
    blocks_appended:
        Number of new blocks appended.
    warnings:
        Conversion warnings for the source document.
    """

    page_id: str
    blocks_deleted: int
    blocks_appended: int
    warnings: list[ConversionWarning] = field(default_factory=list)
