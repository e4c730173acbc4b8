from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from supertokens_client.domain.paths import (
    ENDPOINT_API_VERSION,
    ENDPOINT_JWKS,
    ENDPOINT_JWT,
    ENDPOINT_SIGNIN,
    ENDPOINT_USER_ROLE,
)
from supertokens_client.logging_conf import get_logger

from .state import SUPPORTED_ALGORITHMS, SUPPORTED_VERSIONS, CoreState
from .tokens import mint_token

router = APIRouter()
logger = get_logger("mock_core.api")


class BadInputError(ValueError):
    """Rendered as a plain-text 400, the way the core reports malformed input."""


def get_state(request: Request) -> CoreState:
    return request.app.state.core


def require_api_key(
    request: Request, api_key: str | None = Header(default=None, alias="api-key")
) -> CoreState:
    state = get_state(request)
    if state.api_key and api_key != state.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return state


def _check_scope(state: CoreState, app_id: str, tenant_id: str | None = None) -> None:
    if app_id not in state.app_ids or (tenant_id is not None and tenant_id not in state.tenant_ids):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="AppId or tenantId not found"
        )


async def _read_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as e:
        raise BadInputError("Invalid Json Input") from e
    if not isinstance(body, dict):
        raise BadInputError("Invalid Json Input")
    return body


def _require_str(body: dict[str, Any], name: str) -> str:
    value = body.get(name)
    if not isinstance(value, str):
        raise BadInputError(f"Field name '{name}' is invalid in JSON input")
    return value


@router.post(f"/appid-{{app_id}}/{{tenant_id}}/{ENDPOINT_SIGNIN}", summary="Email/password sign-in")
async def sign_in(
    app_id: str, tenant_id: str, request: Request, state: CoreState = Depends(require_api_key)
) -> dict[str, Any]:
    _check_scope(state, app_id, tenant_id)
    body = await _read_object(request)
    email = _require_str(body, "email")
    password = _require_str(body, "password")

    account = state.accounts.get(email)
    if account is None or account.password != password or tenant_id not in account.user.tenant_ids:
        logger.info("signin.rejected", extra={"event": "signin_rejected", "tenant_id": tenant_id})
        return {"status": "WRONG_CREDENTIALS_ERROR"}

    logger.info("signin.ok", extra={"event": "signin_ok", "user_id": account.user.id})
    return {
        "status": "OK",
        "user": account.user.model_dump(by_alias=True, mode="json"),
        "recipeUserId": account.user.id,
    }


@router.post(f"/appid-{{app_id}}/{ENDPOINT_JWT}", summary="Create a signed token")
async def create_jwt(
    app_id: str, request: Request, state: CoreState = Depends(require_api_key)
) -> dict[str, Any]:
    _check_scope(state, app_id)
    body = await _read_object(request)
    payload = body.get("payload")
    if not isinstance(payload, dict):
        raise BadInputError("Field name 'payload' is invalid in JSON input")
    algorithm = _require_str(body, "algorithm")
    jwks_domain = _require_str(body, "jwksDomain")
    validity = body.get("validity")
    if not isinstance(validity, int) or isinstance(validity, bool) or validity < 0:
        raise BadInputError("Field name 'validity' is invalid in JSON input")

    if algorithm not in SUPPORTED_ALGORITHMS:
        return {"status": "UNSUPPORTED_ALGORITHM_ERROR"}

    token = mint_token(
        payload=payload,
        issuer=jwks_domain,
        validity_s=validity,
        kid=state.kid,
        secret=state.secret,
        algorithm=algorithm,
    )
    logger.info("jwt.create", extra={"event": "jwt_create", "validity": validity})
    return {"status": "OK", "jwt": token}


@router.get(f"/{ENDPOINT_JWKS}", summary="Public verification keys")
async def jwks(request: Request) -> dict[str, Any]:
    state = get_state(request)
    return {"keys": [state.jwk().model_dump(by_alias=True, mode="json", exclude_none=True)]}


@router.put(f"/{ENDPOINT_USER_ROLE}", summary="Add a role to a user")
async def add_role(request: Request, state: CoreState = Depends(require_api_key)) -> dict[str, Any]:
    body = await _read_object(request)
    user_id = _require_str(body, "userId")
    role = _require_str(body, "role")

    holders = state.roles.get(role)
    if holders is None:
        return {"status": "UNKNOWN_ROLE_ERROR"}
    if user_id not in state.user_ids():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown user")

    already = user_id in holders
    holders.add(user_id)
    logger.info(
        "role.add",
        extra={"event": "role_add", "user_id": user_id, "role": role, "already": already},
    )
    return {"status": "OK", "didUserAlreadyHaveRole": already}


@router.get(f"/{ENDPOINT_API_VERSION}", summary="Supported CDI versions")
async def api_version(state: CoreState = Depends(require_api_key)) -> dict[str, Any]:
    return {"versions": list(SUPPORTED_VERSIONS)}
