"""Block API wrappers for the Notion API.

:class:`BlockAPI` (sync) and :class:`AsyncBlockAPI` (async) cover the three
``/blocks`` calls a page replace needs: list the children, delete one
child, and append a batch of new children.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def extract_block_ids(response: dict[str, Any]) -> list[str]:
    """Return the ``id`` of each block in an ``append_children`` response."""
    results = response.get("results", [])
    return [r["id"] for r in results if "id" in r]


class BlockAPI:
    """Synchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`NotionTransport` instance.
    """

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Retrieve all children of a block (or page), following cursors.

        Parameters
        ----------
        block_id:
            The UUID of the parent block or page.

        Returns
        -------
        list[dict]
            All child block objects in order.
        """
        return list(
            self._transport.paginate(
                f"/blocks/{block_id}/children",
                method="GET",
            )
        )

    def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Append child blocks to the end of a block or page.

        Notion accepts at most 100 children per call; larger lists must be
        chunked by the caller (see :class:`drive2notion.emitter.BlockEmitter`).
        """
        return self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )

    def delete(self, block_id: str) -> dict[str, Any]:
        """Delete (archive) a block."""
        return self._transport.request("DELETE", f"/blocks/{block_id}")


class AsyncBlockAPI:
    """Asynchronous twin of :class:`BlockAPI`."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        return [
            item
            async for item in self._transport.paginate(
                f"/blocks/{block_id}/children",
                method="GET",
            )
        ]

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )

    async def delete(self, block_id: str) -> dict[str, Any]:
        return await self._transport.request("DELETE", f"/blocks/{block_id}")
