from __future__ import annotations

import httpx
from pydantic import ValidationError

from ..config import ServiceConfig
from ..domain.headers import build_headers
from ..domain.paths import ENDPOINT_USER_ROLE, raw_url
from ..domain.status import Outcome, classify
from ..errors import AddRoleError, AddRoleErrorKind
from ..models import AddRoleRequest, AddRoleResponse
from ..transport import send

__all__ = ["add_role_to_user"]


async def add_role_to_user(
    user_id: str,
    role: str,
    core_url: str,
    *,
    config: ServiceConfig | None = None,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> bool:
    """Grant `role` to `user_id`.

    Returns whether the user already had the role before this call. Like key
    retrieval, the endpoint hangs off the raw `core_url`.

    Raises:
        AddRoleError: `unknown_role` for a 200 with non-OK status,
            `user_not_found` for a 404.
    """
    if timeout is None and config is not None:
        timeout = config.timeout_s
    body = AddRoleRequest(user_id=user_id, role=role)
    exchange = await send(
        "PUT",
        raw_url(core_url, ENDPOINT_USER_ROLE),
        operation="add_role_to_user",
        headers=build_headers(config) if config is not None else None,
        json=body.model_dump(by_alias=True, mode="json"),
        client=client,
        timeout=timeout,
    )

    outcome = classify(exchange.status_code, exchange.body_status)
    if outcome is not Outcome.ok:
        message = exchange.text if outcome is Outcome.bad_request else exchange.error
        raise AddRoleError.from_outcome(outcome, message, status_code=exchange.status_code)

    try:
        resp = AddRoleResponse.model_validate(exchange.body)
    except ValidationError as e:
        raise AddRoleError(AddRoleErrorKind.unknown, str(e), status_code=200) from e
    if resp.did_user_already_have_role is None:
        raise AddRoleError(
            AddRoleErrorKind.unknown, "OK response without didUserAlreadyHaveRole", status_code=200
        )
    return resp.did_user_already_have_role
