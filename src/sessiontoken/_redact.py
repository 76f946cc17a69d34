"""Helpers for safe debug logging.

Token material is a bearer credential: a full token pasted from a log
is as good as a login.  Everything that reaches a log record goes
through :func:`redact_for_log` or :func:`token_preview` first.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "password_tag",
        "passwordtag",
        "signature",
        "secret",
        "secret_key",
        "key",
        "previous_keys",
        "token",
        "authorization",
        "cookie",
    }
)

_PREVIEW_CHARS = 8


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)


def token_preview(data: bytes) -> str:
    """Short, non-replayable description of raw token bytes."""
    head = data[:_PREVIEW_CHARS].decode("ascii", errors="replace")
    return f"{head}…<{len(data)}b>"
