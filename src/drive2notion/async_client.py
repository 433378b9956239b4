"""Asynchronous drive2notion client.

:class:`AsyncDrive2NotionClient` mirrors :class:`Drive2NotionClient` but
every I/O method is a coroutine.  Requests for one page are still issued
one at a time, in order.

Usage::

    import asyncio
    from drive2notion import AsyncDrive2NotionClient

    async def main():
        async with AsyncDrive2NotionClient(token="secret_xxx") as client:
            await client.replace_page_from_markdown(
                "<page_id>",
                "# Hello\\n\\nWorld",
                modified="2024-05-01T10:00:00.000Z",
            )

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Any

from drive2notion.client import build_page_properties, marker_properties
from drive2notion.config import Drive2NotionConfig
from drive2notion.converter.md_to_notion import MarkdownToNotionConverter
from drive2notion.emitter import AsyncPageWriter
from drive2notion.models import ConversionResult, PageCreateResult, ReplaceResult
from drive2notion.notion_api.blocks import AsyncBlockAPI
from drive2notion.notion_api.databases import AsyncDatabaseAPI
from drive2notion.notion_api.pages import AsyncPageAPI
from drive2notion.notion_api.transport import AsyncNotionTransport
from drive2notion.observability import get_logger

log = get_logger("drive2notion.client")


class AsyncDrive2NotionClient:
    """Asynchronous Markdown-to-Notion sync client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    **kwargs:
        Forwarded to :class:`Drive2NotionConfig`.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        self._config = Drive2NotionConfig(token=token, **kwargs)
        self._transport = AsyncNotionTransport(self._config)
        self._pages = AsyncPageAPI(self._transport)
        self._blocks = AsyncBlockAPI(self._transport)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._converter = MarkdownToNotionConverter(self._config)
        self._writer = AsyncPageWriter(self._pages, self._blocks, self._config)

    def convert(self, markdown: str) -> ConversionResult:
        """Convert Markdown to Notion blocks.  Pure CPU, so not a coroutine."""
        return self._converter.convert(markdown)

    async def find_page_by_key(self, database_id: str, key: str) -> dict[str, Any] | None:
        """Look a synced row up by its source key (async).

        See :meth:`Drive2NotionClient.find_page_by_key`.
        """
        page = await self._databases.query_by_key(
            database_id, self._config.key_property, key,
        )
        log.debug(
            "Page lookup",
            extra={
                "extra_fields": {
                    "op": "find_page",
                    "database_id": database_id,
                    "found": page is not None,
                }
            },
        )
        return page

    async def create_page_from_markdown(
        self,
        database_id: str,
        title: str,
        markdown: str,
        *,
        key: str | None = None,
        modified: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> PageCreateResult:
        """Create a database row from Markdown (async).

        See :meth:`Drive2NotionClient.create_page_from_markdown`.
        """
        conversion = self._converter.convert(markdown)
        page, emitted = await self._writer.create(
            parent={"database_id": database_id},
            properties=build_page_properties(
                self._config, title, key, modified, properties,
            ),
            blocks=conversion.blocks,
        )
        log.info(
            "Page created",
            extra={
                "extra_fields": {
                    "op": "create_page",
                    "page_id": page["id"],
                    "blocks": emitted.blocks_appended,
                    "warnings": len(conversion.warnings),
                }
            },
        )
        return PageCreateResult(
            page_id=page["id"],
            url=page.get("url", ""),
            blocks_created=emitted.blocks_appended,
            warnings=conversion.warnings,
        )

    async def replace_page_from_markdown(
        self,
        page_id: str,
        markdown: str,
        *,
        modified: str | None = None,
    ) -> ReplaceResult:
        """Replace page content from Markdown (async).

        See :meth:`Drive2NotionClient.replace_page_from_markdown`.
        """
        conversion = self._converter.convert(markdown)
        deleted, emitted = await self._writer.replace(
            page_id,
            conversion.blocks,
            properties=marker_properties(self._config, modified),
        )
        log.info(
            "Page replaced",
            extra={
                "extra_fields": {
                    "op": "replace_page",
                    "page_id": page_id,
                    "blocks_deleted": deleted,
                    "blocks": emitted.blocks_appended,
                    "warnings": len(conversion.warnings),
                }
            },
        )
        return ReplaceResult(
            page_id=page_id,
            blocks_deleted=deleted,
            blocks_appended=emitted.blocks_appended,
            warnings=conversion.warnings,
        )

    async def close(self) -> None:
        """Close the underlying async HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncDrive2NotionClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
