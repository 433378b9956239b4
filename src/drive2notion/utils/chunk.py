"""Split an ordered block list into request-sized batches.

Notion's ``append_block_children`` endpoint accepts at most 100 blocks per
call.  Batches keep the original order, and every batch except the last is
full.
"""

from __future__ import annotations

from typing import Any

from drive2notion.config import MAX_BLOCKS_PER_REQUEST


def chunk_blocks(
    blocks: list[dict[str, Any]],
    size: int = MAX_BLOCKS_PER_REQUEST,
) -> list[list[dict[str, Any]]]:
    """Split *blocks* into consecutive batches of at most *size* items.

    An empty input returns ``[]`` (not ``[[]]``).

    Raises
    ------
    ValueError
        If *size* is less than 1.

    Examples
    --------
    >>> [len(b) for b in chunk_blocks([{"type": "divider"}] * 250)]
    [100, 100, 50]
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    return [blocks[i : i + size] for i in range(0, len(blocks), size)]
