"""Metrics hook protocol and no-op default implementation.

drive2notion emits counters and timings around HTTP requests and batch
emission.  A :class:`NoopMetricsHook` is used unless the caller supplies an
object satisfying :class:`MetricsHook` via ``Drive2NotionConfig.metrics``.

Emitted metric names:

* ``drive2notion.requests_total``             -- counter
* ``drive2notion.request_duration_ms``        -- timing
* ``drive2notion.batches_sent_total``         -- counter
* ``drive2notion.blocks_appended_total``      -- counter
* ``drive2notion.blocks_deleted_total``       -- counter
* ``drive2notion.conversion_warnings_total``  -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
