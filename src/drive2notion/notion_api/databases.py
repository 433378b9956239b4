"""Database query wrappers for the Notion API.

:class:`DatabaseAPI` (sync) and :class:`AsyncDatabaseAPI` (async) look a
synced row up by the source document key stored in one of its rich-text
properties.  A sync run uses the result to choose between create and
replace.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def key_filter(property_name: str, key: str) -> dict[str, Any]:
    """Query body matching rows whose rich-text *property_name* equals *key*."""
    return {
        "filter": {
            "property": property_name,
            "rich_text": {"equals": key},
        },
    }


class DatabaseAPI:
    """Synchronous wrapper for the Notion database query endpoint.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def query_by_key(
        self,
        database_id: str,
        property_name: str,
        key: str,
    ) -> dict[str, Any] | None:
        """Return the first row of *database_id* whose key matches, or ``None``.

        Result pages are followed until a row turns up, so a match on a
        later cursor page is still found.  Keys are expected to be unique;
        any further matches are ignored.
        """
        pages = self._transport.paginate(
            f"/databases/{database_id}/query",
            method="POST",
            json=key_filter(property_name, key),
        )
        return next(iter(pages), None)


class AsyncDatabaseAPI:
    """Asynchronous twin of :class:`DatabaseAPI`."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def query_by_key(
        self,
        database_id: str,
        property_name: str,
        key: str,
    ) -> dict[str, Any] | None:
        async for page in self._transport.paginate(
            f"/databases/{database_id}/query",
            method="POST",
            json=key_filter(property_name, key),
        ):
            return page
        return None
