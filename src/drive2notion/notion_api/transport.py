"""Sync and async HTTP transports for the Notion API.

Each request follows a single-shot lifecycle:

1. Send the HTTP request with auth and version headers.
2. On ``2xx`` -- return the parsed JSON response (``{}`` for empty bodies).
3. On any other status -- raise the matching typed error.
4. On timeout / network failure -- raise :class:`Drive2NotionNetworkError`.

Nothing is retried here; callers decide whether a failed operation is run
again later.
"""

from __future__ import annotations

import json as _json
import sys
import time
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx

from drive2notion.config import Drive2NotionConfig
from drive2notion.errors import (
    Drive2NotionAuthError,
    Drive2NotionConflictError,
    Drive2NotionError,
    Drive2NotionNetworkError,
    Drive2NotionNotFoundError,
    Drive2NotionPermissionError,
    Drive2NotionRateLimitError,
    Drive2NotionServerError,
    Drive2NotionValidationError,
)
from drive2notion.observability import NoopMetricsHook, get_logger

log = get_logger("drive2notion.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


_STATUS_ERRORS: dict[int, tuple[type[Drive2NotionError], str]] = {
    401: (Drive2NotionAuthError, "Authentication failed"),
    403: (Drive2NotionPermissionError, "Permission denied"),
    404: (Drive2NotionNotFoundError, "Resource not found"),
    409: (Drive2NotionConflictError, "Conflict"),
    429: (Drive2NotionRateLimitError, "Rate limited"),
}


def _error_for_status(status: int) -> tuple[type[Drive2NotionError], str]:
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status]
    if status >= 500:
        return Drive2NotionServerError, f"Server error {status}"
    return Drive2NotionValidationError, f"Client error {status}"


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the :class:`Drive2NotionError` subclass matching a non-2xx status.

    Every error carries ``status_code`` and ``notion_code`` in its context,
    plus ``operation`` (403), ``path`` (404), ``retry_after_seconds`` (429)
    or the parsed ``body`` (other 4xx).
    """
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    notion_code = body.get("code", "")
    detail = body.get("message", response.text[:500])

    log.warning(
        "Notion API error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "status_code": status,
                "notion_code": notion_code,
            }
        },
    )

    error_cls, summary = _error_for_status(status)
    context: dict[str, Any] = {"status_code": status, "notion_code": notion_code}
    if status == 403:
        context["operation"] = f"{method} {path}"
    elif status == 404:
        context["path"] = path
    elif status == 429:
        context["retry_after_seconds"] = _parse_retry_after(response)
    elif error_cls is Drive2NotionValidationError:
        context["body"] = body

    raise error_cls(
        message=f"{summary} on {method} {path}: {detail}",
        context=context,
    )


def _dump_payload(
    method: str,
    url: str,
    payload: dict | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from drive2notion.utils.redact import redact

    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, token), indent=2, default=str),
        file=sys.stderr,
    )


def _emit_debug_dump(
    config: Drive2NotionConfig,
    method: str,
    response: httpx.Response,
    json_payload: Any,
) -> None:
    if not config.debug_dump_payload:
        return
    try:
        resp_body = response.json()
    except (ValueError, KeyError):
        resp_body = response.text[:1000]
    _dump_payload(
        method, str(response.url), json_payload,
        response.status_code, resp_body,
        token=config.token,
    )


def _network_error(method: str, path: str, exc: Exception) -> Drive2NotionNetworkError:
    log.warning(
        "Request network error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "error": str(exc),
            }
        },
    )
    return Drive2NotionNetworkError(
        message=f"Network error on {method} {path}: {exc}",
        context={"method": method, "path": path},
        cause=exc,
    )


def _handle_response(
    config: Drive2NotionConfig,
    metrics: Any,
    method: str,
    path: str,
    response: httpx.Response,
    json_payload: Any,
    t0: float,
) -> dict:
    """Record metrics, dump if enabled, then return the body or raise."""
    elapsed_ms = (time.monotonic() - t0) * 1000
    tags = {"method": method, "status": str(response.status_code)}
    metrics.increment("drive2notion.requests_total", tags=tags)
    metrics.timing("drive2notion.request_duration_ms", elapsed_ms, tags=tags)

    _emit_debug_dump(config, method, response, json_payload)

    if 200 <= response.status_code < 300:
        if response.status_code == 204 or not response.content:
            return {}
        result: dict = response.json()
        return result
    _raise_for_status(response, method, path)
    return {}  # unreachable


def _client_kwargs(config: Drive2NotionConfig) -> dict[str, Any]:
    return {
        "base_url": config.base_url,
        "headers": {
            "Authorization": f"Bearer {config.token}",
            "Notion-Version": config.notion_version,
            "Content-Type": "application/json",
        },
        "timeout": httpx.Timeout(config.timeout_seconds),
        "proxy": config.http_proxy,
    }


def _page_params(kwargs: dict[str, Any], method: str, cursor: str | None) -> None:
    """Merge ``page_size`` / ``start_cursor`` into the body or query string."""
    key = "json" if method.upper() in ("POST", "PATCH") else "params"
    values: dict = dict(kwargs.get(key) or {})
    values["page_size"] = 100
    if cursor is not None:
        values["start_cursor"] = cursor
    else:
        values.pop("start_cursor", None)
    kwargs[key] = values


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport with auth headers and typed errors.

    Parameters
    ----------
    config:
        A :class:`Drive2NotionConfig` instance.
    """

    def __init__(self, config: Drive2NotionConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.Client(**_client_kwargs(config))

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute one HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        **kwargs:
            Forwarded to :meth:`httpx.Client.request`.

        Returns
        -------
        dict
            Parsed JSON response body.

        Raises
        ------
        Drive2NotionError
            A typed subclass for every non-2xx status, or
            :class:`Drive2NotionNetworkError` on transport failure.
        """
        t0 = time.monotonic()
        try:
            response = self._client.request(method, path, **kwargs)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            self._metrics.increment(
                "drive2notion.requests_total",
                tags={"method": method, "status": "error"},
            )
            raise _network_error(method, path, exc) from exc
        return _handle_response(
            self._config, self._metrics, method, path,
            response, kwargs.get("json"), t0,
        )

    def paginate(self, path: str, **kwargs: Any) -> Iterator[dict]:
        """Auto-paginate a Notion list endpoint, yielding each result item.

        Follows ``next_cursor`` until ``has_more`` is ``False``.  Pass
        ``method="POST"`` for endpoints that page through a JSON body.
        """
        method = kwargs.pop("method", "GET")
        cursor: str | None = None

        while True:
            _page_params(kwargs, method, cursor)
            data = self.request(method, path, **kwargs)
            yield from data.get("results", [])

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport on ``httpx.AsyncClient``.

    Same request lifecycle and error mapping as :class:`NotionTransport`.
    """

    def __init__(self, config: Drive2NotionConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(**_client_kwargs(config))

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute one HTTP request (async).

        See :meth:`NotionTransport.request`.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            self._metrics.increment(
                "drive2notion.requests_total",
                tags={"method": method, "status": "error"},
            )
            raise _network_error(method, path, exc) from exc
        return _handle_response(
            self._config, self._metrics, method, path,
            response, kwargs.get("json"), t0,
        )

    async def paginate(self, path: str, **kwargs: Any) -> AsyncIterator[dict]:
        """Auto-paginate a Notion list endpoint (async)."""
        method = kwargs.pop("method", "GET")
        cursor: str | None = None

        while True:
            _page_params(kwargs, method, cursor)
            data = await self.request(method, path, **kwargs)
            for item in data.get("results", []):
                yield item

            if not data.get("has_more", False):
                break
            cursor = data.get("next_cursor")
            if cursor is None:
                break

    async def close(self) -> None:
        """Close the underlying async HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
