"""drive2notion.notion_api -- Notion API transport and endpoint wrappers.

This sub-package provides:

* :mod:`.transport` -- HTTP transport with auth headers and typed errors.
* :mod:`.pages` -- Page API wrappers.
* :mod:`.blocks` -- Block API wrappers.
* :mod:`.databases` -- Keyed database row lookup.
* :mod:`.properties` -- Database property value builders.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI, extract_block_ids
from .databases import AsyncDatabaseAPI, DatabaseAPI, key_filter
from .pages import AsyncPageAPI, PageAPI
from .properties import date_property, rich_text_property, title_property
from .transport import AsyncNotionTransport, NotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "BlockAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "date_property",
    "extract_block_ids",
    "key_filter",
    "rich_text_property",
    "title_property",
]
