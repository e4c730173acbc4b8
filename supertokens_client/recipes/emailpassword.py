from __future__ import annotations

import httpx
from pydantic import ValidationError

from ..config import ServiceConfig
from ..domain.headers import Capability, build_headers
from ..domain.paths import ENDPOINT_SIGNIN, tenant_url
from ..domain.status import Outcome, classify
from ..errors import SignInError, SignInErrorKind
from ..models import SignInRequest, SignInResponse, SignInSuccess
from ..transport import send

__all__ = ["sign_in"]


async def sign_in(
    config: ServiceConfig,
    email: str,
    password: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> SignInSuccess:
    """Sign a user in with email and password on the configured tenant.

    Inputs are not validated locally; the core decides what is acceptable.

    Raises:
        SignInError: `kind` is `wrong_credentials` when the core answers 200
            with a non-OK status, otherwise the HTTP-derived kind.
    """
    body = SignInRequest(email=email, password=password)
    exchange = await send(
        "POST",
        tenant_url(config, ENDPOINT_SIGNIN),
        operation="sign_in",
        headers=build_headers(config, Capability.email_password),
        json=body.model_dump(by_alias=True, mode="json"),
        client=client,
        timeout=timeout if timeout is not None else config.timeout_s,
    )

    outcome = classify(exchange.status_code, exchange.body_status)
    if outcome is not Outcome.ok:
        message = exchange.text if outcome is Outcome.bad_request else exchange.error
        raise SignInError.from_outcome(outcome, message, status_code=exchange.status_code)

    try:
        resp = SignInResponse.model_validate(exchange.body)
    except ValidationError as e:
        raise SignInError(SignInErrorKind.unknown, str(e), status_code=200) from e
    if resp.user is None or resp.recipe_user_id is None:
        raise SignInError(
            SignInErrorKind.unknown, "OK response without user", status_code=200
        )
    return SignInSuccess(user=resp.user, user_id=resp.recipe_user_id)
