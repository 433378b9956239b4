"""Synchronous drive2notion client.

:class:`Drive2NotionClient` wires the converter, the Notion transport and
the page writer together behind the operations a Drive-to-Notion sync
needs: find the row synced from a source key, create a database row from a
Markdown export, and replace the content of an existing row.

Usage::

    from drive2notion import Drive2NotionClient

    with Drive2NotionClient(token="secret_xxx") as client:
        result = client.create_page_from_markdown(
            database_id="<database_id>",
            title="Meeting notes",
            markdown="# Hello\\n\\nWorld",
            key="<drive_file_id>",
            modified="2024-05-01T10:00:00.000Z",
        )
"""

from __future__ import annotations

from typing import Any

from drive2notion.config import Drive2NotionConfig
from drive2notion.converter.md_to_notion import MarkdownToNotionConverter
from drive2notion.emitter import PageWriter
from drive2notion.models import ConversionResult, PageCreateResult, ReplaceResult
from drive2notion.notion_api.blocks import BlockAPI
from drive2notion.notion_api.databases import DatabaseAPI
from drive2notion.notion_api.pages import PageAPI
from drive2notion.notion_api.properties import (
    date_property,
    rich_text_property,
    title_property,
)
from drive2notion.notion_api.transport import NotionTransport
from drive2notion.observability import get_logger

log = get_logger("drive2notion.client")


def build_page_properties(
    config: Drive2NotionConfig,
    title: str,
    key: str | None = None,
    modified: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Property values for a new synced page, under the configured names.

    Entries in *extra* are kept unless they collide with a generated one.
    """
    properties: dict[str, Any] = dict(extra or {})
    properties[config.title_property] = title_property(title)
    if key is not None:
        properties[config.key_property] = rich_text_property(key)
    if modified is not None:
        properties[config.modified_property] = date_property(modified)
    return properties


def marker_properties(
    config: Drive2NotionConfig,
    modified: str | None,
) -> dict[str, Any] | None:
    if modified is None:
        return None
    return {config.modified_property: date_property(modified)}


class Drive2NotionClient:
    """Synchronous Markdown-to-Notion sync client.

    Parameters
    ----------
    token:
        Notion integration token.  **Required.**
    **kwargs:
        All remaining keyword arguments are forwarded to
        :class:`Drive2NotionConfig`.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        self._config = Drive2NotionConfig(token=token, **kwargs)
        self._transport = NotionTransport(self._config)
        self._pages = PageAPI(self._transport)
        self._blocks = BlockAPI(self._transport)
        self._databases = DatabaseAPI(self._transport)
        self._converter = MarkdownToNotionConverter(self._config)
        self._writer = PageWriter(self._pages, self._blocks, self._config)

    def convert(self, markdown: str) -> ConversionResult:
        """Convert Markdown to Notion blocks without any API call."""
        return self._converter.convert(markdown)

    def find_page_by_key(self, database_id: str, key: str) -> dict[str, Any] | None:
        """Return the row of *database_id* synced from *key*, or ``None``.

        Rows are matched on the configured key property, so the returned
        page's ``id`` can be passed to :meth:`replace_page_from_markdown`.
        """
        page = self._databases.query_by_key(database_id, self._config.key_property, key)
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

    def create_page_from_markdown(
        self,
        database_id: str,
        title: str,
        markdown: str,
        *,
        key: str | None = None,
        modified: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> PageCreateResult:
        """Create a database row whose content is the converted *markdown*.

        Parameters
        ----------
        database_id:
            The target Notion database.
        title:
            Value for the title property.
        markdown:
            Markdown export of the source document.
        key:
            Source document key, written to the key property.
        modified:
            Source modification timestamp, written verbatim to the marker
            property.
        properties:
            Extra property values to send along.

        Returns
        -------
        PageCreateResult
        """
        conversion = self._converter.convert(markdown)
        page, emitted = self._writer.create(
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

    def replace_page_from_markdown(
        self,
        page_id: str,
        markdown: str,
        *,
        modified: str | None = None,
    ) -> ReplaceResult:
        """Replace the content of *page_id* with the converted *markdown*.

        The marker property is updated to *modified* only after every new
        block was appended.  A failure part way raises
        :class:`~drive2notion.errors.Drive2NotionBatchError` and leaves the
        marker untouched.
        """
        conversion = self._converter.convert(markdown)
        deleted, emitted = self._writer.replace(
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

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        self._transport.close()

    def __enter__(self) -> Drive2NotionClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
