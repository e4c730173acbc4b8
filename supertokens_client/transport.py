from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from .config import DEFAULT_TIMEOUT_S
from .domain.status import body_status
from .logging_conf import get_logger

__all__ = ["Exchange", "send"]

logger = get_logger("supertokens_client.transport")


@dataclass
class Exchange:
    """What came back from one request.

    `status_code` is None when no response was received (DNS, connect,
    timeout); `body` is None when the response was not JSON.
    """

    status_code: int | None
    text: str = ""
    body: Any = None
    error: str | None = None

    @property
    def body_status(self) -> str | None:
        return body_status(self.body)


async def send(
    method: str,
    url: str,
    *,
    operation: str,
    headers: dict[str, str] | None = None,
    json: Any = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Exchange:
    """Send one request and capture the result without raising on HTTP errors.

    - Uses the caller's `client` when given (the caller owns its lifecycle)
    - Otherwise opens a short-lived client bound to `timeout`
    - Transport failures and unusable URLs become an `Exchange` with no status code
    """
    timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_S
    logger.debug(
        "core.request",
        extra={"event": "core_request", "operation": operation, "method": method, "url": url},
    )
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned:
                response = await owned.request(method, url, headers=headers, json=json)
        else:
            response = await client.request(
                method, url, headers=headers, json=json, timeout=timeout
            )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(
            "core.transport_error",
            extra={
                "event": "core_transport_error",
                "operation": operation,
                "url": url,
                "error": repr(e),
            },
        )
        return Exchange(status_code=None, error=repr(e))

    try:
        body = response.json()
    except ValueError:
        body = None

    logger.debug(
        "core.response",
        extra={
            "event": "core_response",
            "operation": operation,
            "status_code": response.status_code,
            "body_status": body_status(body),
        },
    )
    return Exchange(status_code=response.status_code, text=response.text, body=body)
