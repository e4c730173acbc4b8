from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "STATUS_OK",
    "Outcome",
    "body_status",
    "classify",
]

STATUS_OK = "OK"


class Outcome(str, Enum):
    ok = "ok"
    not_ok = "not_ok"
    bad_request = "bad_request"
    invalid_api_key = "invalid_api_key"
    not_found = "not_found"
    internal = "internal"
    unknown = "unknown"


_BY_HTTP_STATUS = {
    400: Outcome.bad_request,
    401: Outcome.invalid_api_key,
    404: Outcome.not_found,
    500: Outcome.internal,
}


def body_status(body: Any) -> str | None:
    """Return the envelope `status` string of a decoded body, if it has one."""
    if not isinstance(body, dict):
        return None
    value = body.get("status")
    return value if isinstance(value, str) else None


def classify(
    status_code: int | None, status: str | None = None, *, enveloped: bool = True
) -> Outcome:
    """Map an HTTP status plus the body's `status` field to one outcome.

    The core reports some domain failures with HTTP 200, so for enveloped
    responses a 200 is only `ok` when the body says "OK":

      None (no response)        -> unknown
      200, status == "OK"       -> ok
      200, other status string  -> not_ok
      200, no readable status   -> unknown
      400 / 401 / 404 / 500     -> bad_request / invalid_api_key / not_found / internal
      anything else             -> unknown

    Responses without an envelope (`enveloped=False`) are `ok` on any 200.
    """
    if status_code is None:
        return Outcome.unknown

    if status_code == 200:
        if not enveloped:
            return Outcome.ok
        if status is None:
            return Outcome.unknown
        return Outcome.ok if status == STATUS_OK else Outcome.not_ok

    return _BY_HTTP_STATUS.get(status_code, Outcome.unknown)
