"""Page API wrappers for the Notion API.

:class:`PageAPI` (sync) and :class:`AsyncPageAPI` (async) wrap the
``/pages`` endpoints used to create database rows and to stamp their
properties after a content replace.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def _create_body(
    parent: dict[str, Any],
    properties: dict[str, Any],
    children: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "parent": parent,
        "properties": properties,
    }
    if children is not None:
        body["children"] = children
    return body


class PageAPI:
    """Synchronous wrapper for the Notion Pages API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a new page.

        Parameters
        ----------
        parent:
            Parent object, e.g. ``{"database_id": "..."}``.
        properties:
            Page property values keyed by property name.
        children:
            Optional initial content (at most 100 blocks).  The page writer
            never passes any; content is appended afterwards in batches.

        Returns
        -------
        dict
            The created page object.
        """
        return self._transport.request(
            "POST", "/pages", json=_create_body(parent, properties, children)
        )

    def update(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        """Update the given properties of a page; others are left untouched."""
        return self._transport.request(
            "PATCH", f"/pages/{page_id}", json={"properties": properties}
        )


class AsyncPageAPI:
    """Asynchronous twin of :class:`PageAPI`."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/pages", json=_create_body(parent, properties, children)
        )

    async def update(self, page_id: str, properties: dict[str, Any]) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/pages/{page_id}", json={"properties": properties}
        )
