from __future__ import annotations

import httpx
from pydantic import ValidationError

from ..config import ServiceConfig
from ..domain.headers import build_headers
from ..domain.paths import ENDPOINT_API_VERSION, raw_url
from ..domain.status import Outcome, classify
from ..errors import ApiVersionError, ApiVersionErrorKind
from ..models import ApiVersionResponse
from ..transport import send

__all__ = ["get_api_versions"]


async def get_api_versions(
    config: ServiceConfig,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Return the CDI versions the core supports, e.g. ["3.0", "4.0"]."""
    exchange = await send(
        "GET",
        raw_url(config.core_domain, ENDPOINT_API_VERSION),
        operation="get_api_versions",
        headers=build_headers(config),
        client=client,
        timeout=timeout if timeout is not None else config.timeout_s,
    )

    outcome = classify(exchange.status_code, enveloped=False)
    if outcome is not Outcome.ok:
        raise ApiVersionError.from_outcome(
            outcome, exchange.error, status_code=exchange.status_code
        )

    try:
        return ApiVersionResponse.model_validate(exchange.body).versions
    except ValidationError as e:
        raise ApiVersionError(ApiVersionErrorKind.unknown, str(e), status_code=200) from e
