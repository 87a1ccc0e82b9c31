"""Response envelope used by every endpoint.

Every body carries ``success`` plus either ``data`` or ``message``/``error``.
"""

from __future__ import annotations

from typing import Any


def envelope(data: Any = None, *, message: str | None = None, success: bool = True, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return body


def error_envelope(message: str, *, error: str | None = None, errors: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if error:
        body["error"] = error
    if errors is not None:
        body["errors"] = errors
    return body
