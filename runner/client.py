from __future__ import annotations

import asyncio
import time

import httpx

from runner.types import CoreUnavailableError
from supertokens_client.logging_conf import get_logger

logger = get_logger("runner.client")


async def wait_for_core(client: httpx.AsyncClient, core_url: str, timeout_s: float = 20.0) -> None:
    """Ping /hello until it answers 200 or raise after `timeout_s` seconds."""
    deadline = time.monotonic() + timeout_s
    url = f"{core_url.rstrip('/')}/hello"
    while time.monotonic() < deadline:
        try:
            r = await client.get(url)
            if r.status_code == 200:
                logger.info("core.ready", extra={"event": "core_ready", "url": url})
                return
        except httpx.HTTPError as e:
            logger.debug("core.not_ready", extra={"event": "core_not_ready", "error": repr(e)})
        await asyncio.sleep(0.25)
    raise CoreUnavailableError(f"{url} did not answer within {timeout_s}s")
