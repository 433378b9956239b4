"""Batch emission of converted blocks to a Notion page.

:class:`BlockEmitter` splits a block list into request-sized chunks and
appends them to a parent one chunk at a time, strictly in order.  The first
failing chunk stops emission; nothing is retried and nothing already
appended is rolled back.

:class:`PageWriter` builds the two page-level operations on top of it:

* **create** -- create the page with no children, then emit every chunk.
* **replace** -- delete every existing child, emit every chunk, and only
  then update the page properties.  Because the properties (including the
  source modification marker) are written last, a replace that fails part
  way leaves the marker stale and the next sync run replaces the page
  again.

The async twins keep the same one-request-at-a-time ordering.
"""

from __future__ import annotations

import time
from typing import Any

from drive2notion.config import Drive2NotionConfig
from drive2notion.errors import Drive2NotionBatchError, Drive2NotionError
from drive2notion.models import EmitResult
from drive2notion.notion_api.blocks import extract_block_ids
from drive2notion.observability import NoopMetricsHook, get_logger
from drive2notion.utils.chunk import chunk_blocks

log = get_logger("drive2notion.emitter")


def _batch_failed(
    parent_id: str,
    batch_index: int,
    total_batches: int,
    result: EmitResult,
    exc: Drive2NotionError,
) -> Drive2NotionBatchError:
    log.warning(
        "Batch append failed",
        extra={
            "extra_fields": {
                "op": "emit",
                "parent_id": parent_id,
                "failed_batch": batch_index,
                "total_batches": total_batches,
                "error_code": str(exc.code),
            }
        },
    )
    return Drive2NotionBatchError(
        message=(
            f"Appending batch {batch_index + 1} of {total_batches} to "
            f"{parent_id} failed: {exc.message}"
        ),
        context={
            "parent_id": parent_id,
            "failed_batch": batch_index,
            "total_batches": total_batches,
            "batches_sent": result.batches_sent,
            "blocks_appended": result.blocks_appended,
        },
        cause=exc,
    )


def _record_batch(
    parent_id: str,
    result: EmitResult,
    batch: list[dict[str, Any]],
    response: dict[str, Any],
    metrics: Any,
) -> None:
    log.debug(
        "Batch appended",
        extra={
            "extra_fields": {
                "op": "emit",
                "parent_id": parent_id,
                "batch": result.batches_sent,
                "size": len(batch),
            }
        },
    )
    result.batches_sent += 1
    result.blocks_appended += len(batch)
    result.block_ids.extend(extract_block_ids(response))
    metrics.increment("drive2notion.batches_sent_total")
    metrics.increment("drive2notion.blocks_appended_total", len(batch))


def _log_emitted(parent_id: str, result: EmitResult, t0: float) -> None:
    log.info(
        "Blocks emitted",
        extra={
            "extra_fields": {
                "op": "emit",
                "parent_id": parent_id,
                "batches_sent": result.batches_sent,
                "blocks_appended": result.blocks_appended,
                "duration_ms": round((time.monotonic() - t0) * 1000, 1),
            }
        },
    )


def _existing_ids(children: list[dict[str, Any]]) -> list[str]:
    return [child["id"] for child in children if child.get("id")]


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------

class BlockEmitter:
    """Append blocks to a parent in ordered, size-bounded batches.

    Parameters
    ----------
    blocks_api:
        A :class:`~drive2notion.notion_api.BlockAPI` (or any object with a
        compatible ``append_children``).
    config:
        Supplies ``batch_size`` and the metrics hook.
    """

    def __init__(self, blocks_api: Any, config: Drive2NotionConfig) -> None:
        self._api = blocks_api
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def emit(self, parent_id: str, blocks: list[dict[str, Any]]) -> EmitResult:
        """Append *blocks* under *parent_id*, one batch per request.

        Raises
        ------
        Drive2NotionBatchError
            When a batch fails.  Batches before it stay appended; batches
            after it are never sent.
        """
        batches = chunk_blocks(blocks, self._config.batch_size)
        result = EmitResult()
        t0 = time.monotonic()

        for index, batch in enumerate(batches):
            try:
                response = self._api.append_children(parent_id, batch)
            except Drive2NotionError as exc:
                raise _batch_failed(parent_id, index, len(batches), result, exc) from exc
            _record_batch(parent_id, result, batch, response, self._metrics)

        _log_emitted(parent_id, result, t0)
        return result


class PageWriter:
    """Create or replace page content from a prepared block list."""

    def __init__(
        self,
        pages_api: Any,
        blocks_api: Any,
        config: Drive2NotionConfig,
    ) -> None:
        self._pages = pages_api
        self._blocks = blocks_api
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._emitter = BlockEmitter(blocks_api, config)

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        blocks: list[dict[str, Any]],
    ) -> tuple[dict[str, Any], EmitResult]:
        """Create a page, then append *blocks* to it.

        Returns the created page object and the emission result.
        """
        page = self._pages.create(parent=parent, properties=properties)
        emitted = self._emitter.emit(page["id"], blocks)
        return page, emitted

    def replace(
        self,
        page_id: str,
        blocks: list[dict[str, Any]],
        properties: dict[str, Any] | None = None,
    ) -> tuple[int, EmitResult]:
        """Replace every child of *page_id* with *blocks*.

        *properties*, when given, are written only after the last batch
        succeeded.

        Returns
        -------
        tuple[int, EmitResult]
            The number of deleted children and the emission result.
        """
        deleted = 0
        for block_id in _existing_ids(self._blocks.get_children(page_id)):
            self._blocks.delete(block_id)
            deleted += 1
        self._metrics.increment("drive2notion.blocks_deleted_total", deleted)

        emitted = self._emitter.emit(page_id, blocks)

        if properties:
            self._pages.update(page_id, properties)
        return deleted, emitted


# ---------------------------------------------------------------------------
# Async
# ---------------------------------------------------------------------------

class AsyncBlockEmitter:
    """Asynchronous twin of :class:`BlockEmitter`.

    Batches are awaited one after another, never gathered.
    """

    def __init__(self, blocks_api: Any, config: Drive2NotionConfig) -> None:
        self._api = blocks_api
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    async def emit(self, parent_id: str, blocks: list[dict[str, Any]]) -> EmitResult:
        batches = chunk_blocks(blocks, self._config.batch_size)
        result = EmitResult()
        t0 = time.monotonic()

        for index, batch in enumerate(batches):
            try:
                response = await self._api.append_children(parent_id, batch)
            except Drive2NotionError as exc:
                raise _batch_failed(parent_id, index, len(batches), result, exc) from exc
            _record_batch(parent_id, result, batch, response, self._metrics)

        _log_emitted(parent_id, result, t0)
        return result


class AsyncPageWriter:
    """Asynchronous twin of :class:`PageWriter`."""

    def __init__(
        self,
        pages_api: Any,
        blocks_api: Any,
        config: Drive2NotionConfig,
    ) -> None:
        self._pages = pages_api
        self._blocks = blocks_api
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._emitter = AsyncBlockEmitter(blocks_api, config)

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        blocks: list[dict[str, Any]],
    ) -> tuple[dict[str, Any], EmitResult]:
        page = await self._pages.create(parent=parent, properties=properties)
        emitted = await self._emitter.emit(page["id"], blocks)
        return page, emitted

    async def replace(
        self,
        page_id: str,
        blocks: list[dict[str, Any]],
        properties: dict[str, Any] | None = None,
    ) -> tuple[int, EmitResult]:
        deleted = 0
        for block_id in _existing_ids(await self._blocks.get_children(page_id)):
            await self._blocks.delete(block_id)
            deleted += 1
        self._metrics.increment("drive2notion.blocks_deleted_total", deleted)

        emitted = await self._emitter.emit(page_id, blocks)

        if properties:
            await self._pages.update(page_id, properties)
        return deleted, emitted
