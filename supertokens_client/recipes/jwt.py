"""Token issuance and verification-key retrieval.

Terminology:
- JWT: JSON Web Token, minted by the core on behalf of a user
- JWK / JWKS: JSON Web Key / Key-Set, the public keys that verify those tokens
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ..config import ServiceConfig
from ..domain.headers import Capability, build_headers
from ..domain.paths import ENDPOINT_JWKS, ENDPOINT_JWT, app_url, raw_url
from ..domain.status import Outcome, classify
from ..errors import CreateJwtError, CreateJwtErrorKind, JwksError, JwksErrorKind
from ..models import (
    DEFAULT_JWT_VALIDITY_S,
    MAX_JWT_VALIDITY_S,
    CreateJwtRequest,
    CreateJwtResponse,
    JwkSet,
)
from ..transport import send

__all__ = ["DEFAULT_JWT_EXPIRATION", "create_jwt", "get_jwks"]

DEFAULT_JWT_EXPIRATION = timedelta(seconds=DEFAULT_JWT_VALIDITY_S)


async def create_jwt(
    config: ServiceConfig,
    payload: Any,
    expires_in: timedelta | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> str:
    """Have the core sign `payload` and return the compact token.

    The algorithm (RS256), issuer (`config.core_domain`) and static-key
    preference are fixed. `expires_in` defaults to one day.

    Raises:
        CreateJwtError: `unsupported_algorithm` for a 200 with non-OK status.
        ValueError: if `expires_in` is negative, not whole seconds, or does
            not fit the core's unsigned 32-bit `validity`.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    if expires_in is None:
        expires_in = DEFAULT_JWT_EXPIRATION
    if expires_in % timedelta(seconds=1):
        raise ValueError("expires_in must be a whole number of seconds")
    validity = int(expires_in.total_seconds())
    if not 0 <= validity <= MAX_JWT_VALIDITY_S:
        raise ValueError(f"expires_in must be between 0 and {MAX_JWT_VALIDITY_S} seconds")

    body = CreateJwtRequest(payload=payload, jwks_domain=config.core_domain, validity=validity)
    exchange = await send(
        "POST",
        app_url(config, ENDPOINT_JWT),
        operation="create_jwt",
        headers=build_headers(config, Capability.jwt),
        json=body.model_dump(by_alias=True, mode="json"),
        client=client,
        timeout=timeout if timeout is not None else config.timeout_s,
    )

    outcome = classify(exchange.status_code, exchange.body_status)
    if outcome is not Outcome.ok:
        message = exchange.text if outcome is Outcome.bad_request else exchange.error
        raise CreateJwtError.from_outcome(outcome, message, status_code=exchange.status_code)

    try:
        resp = CreateJwtResponse.model_validate(exchange.body)
    except ValidationError as e:
        raise CreateJwtError(CreateJwtErrorKind.unknown, str(e), status_code=200) from e
    if not resp.jwt:
        raise CreateJwtError(CreateJwtErrorKind.unknown, "OK response without jwt", status_code=200)
    return resp.jwt


async def get_jwks(
    core_url: str,
    *,
    config: ServiceConfig | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> JwkSet:
    """Fetch the key set from the core's well-known path.

    The path is appended to `core_url` as-is: no app or tenant scoping and no
    `rid` header. Auth headers are sent only when `config` is given.

    Raises:
        JwksError: `response_format` when a 200 body is not a key set.
    """
    if timeout is None and config is not None:
        timeout = config.timeout_s
    exchange = await send(
        "GET",
        raw_url(core_url, ENDPOINT_JWKS),
        operation="get_jwks",
        headers=build_headers(config) if config is not None else None,
        client=client,
        timeout=timeout,
    )

    outcome = classify(exchange.status_code, enveloped=False)
    if outcome is not Outcome.ok:
        raise JwksError.from_outcome(outcome, exchange.error, status_code=exchange.status_code)

    try:
        return JwkSet.model_validate(exchange.body)
    except ValidationError as e:
        raise JwksError(JwksErrorKind.response_format, str(e), status_code=200) from e
