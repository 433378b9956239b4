"""Token / payload redaction for debug dumps.

Anything written to stderr by ``debug_dump_payload`` goes through
:func:`redact` first:

* Values under credential-like keys (``Authorization``, ``token`` ...) are
  replaced with ``<redacted>``; a ``Bearer`` header keeps only its scheme.
* The full bearer token is scrubbed from every string in the tree.
* Base64 ``data:`` URIs (which can appear as link targets in exported
  documents) are replaced with ``<data_uri:N_chars>``.
"""

from __future__ import annotations

import copy
import re
from typing import Any

_DATA_URI_RE = re.compile(
    r"data:[a-zA-Z0-9_.+-]+/[a-zA-Z0-9_.+-]+;base64,[A-Za-z0-9+/=]+"
)

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")

# Substring match, case-insensitive, against dict keys.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "private_key",
    "api_key",
})


def _mask_token(value: str, token: str | None) -> str:
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        value = _DATA_URI_RE.sub(
            lambda m: f"<data_uri:{len(m.group(0))}_chars>", value,
        )
        if token:
            value = _mask_token(value, token)
        return value
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            if isinstance(value, str) and _BEARER_RE.match(value):
                result[key] = _mask_token(value, token)
            else:
                result[key] = "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with sensitive data redacted.

    The original *payload* is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer ntn_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    return _redact_dict(copy.deepcopy(payload), token)
