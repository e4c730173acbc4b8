import json

import httpx
import pytest
from conftest import API_KEY, CORE_URL, EMAIL, PASSWORD

from supertokens_client import AddRoleError, ServiceConfig, add_role_to_user, sign_in
from supertokens_client.errors import AddRoleErrorKind


@pytest.mark.asyncio
async def test_grant_then_regrant(config, core_client):
    async with core_client() as client:
        user = await sign_in(config, EMAIL, PASSWORD, client=client)
        first = await add_role_to_user(
            user.user_id, "admin", CORE_URL, config=config, client=client
        )
        second = await add_role_to_user(
            user.user_id, "admin", CORE_URL, config=config, client=client
        )

    assert first is False
    assert second is True


@pytest.mark.asyncio
async def test_unknown_role(config, core_client, core_state):
    user_id = next(iter(core_state.user_ids()))
    async with core_client() as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user(user_id, "superuser", CORE_URL, config=config, client=client)
    assert exc.value.kind is AddRoleErrorKind.unknown_role


@pytest.mark.asyncio
async def test_unknown_user(config, core_client):
    async with core_client() as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user("no-such-user", "admin", CORE_URL, config=config, client=client)
    assert exc.value.kind is AddRoleErrorKind.user_not_found


@pytest.mark.asyncio
async def test_invalid_api_key(core_client, core_state):
    user_id = next(iter(core_state.user_ids()))
    cfg = ServiceConfig(core_domain=CORE_URL, api_key="wrong")
    async with core_client() as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user(user_id, "admin", CORE_URL, config=cfg, client=client)
    assert exc.value.kind is AddRoleErrorKind.invalid_api_key


@pytest.mark.asyncio
async def test_request_shape(config, canned):
    seen: list[httpx.Request] = []
    body = {"status": "OK", "didUserAlreadyHaveRole": False}
    async with canned(200, json=body, seen=seen) as client:
        already = await add_role_to_user("u1", "editor", CORE_URL, config=config, client=client)
    assert already is False

    (request,) = seen
    assert request.method == "PUT"
    assert str(request.url) == f"{CORE_URL}/recipe/user/role"
    assert request.headers["api-key"] == API_KEY
    assert "rid" not in request.headers
    assert json.loads(request.content) == {"userId": "u1", "role": "editor"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "code, kind",
    [
        (400, AddRoleErrorKind.bad_request),
        (500, AddRoleErrorKind.internal),
        (418, AddRoleErrorKind.unknown),
    ],
)
async def test_http_status_kinds(canned, code, kind):
    async with canned(code, text="Field name 'role' is invalid in JSON input") as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user("u1", "editor", CORE_URL, client=client)
    assert exc.value.kind is kind
    if kind is AddRoleErrorKind.bad_request:
        assert exc.value.message == "Field name 'role' is invalid in JSON input"


@pytest.mark.asyncio
async def test_ok_without_flag_is_unknown(canned):
    async with canned(200, json={"status": "OK"}) as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user("u1", "editor", CORE_URL, client=client)
    assert exc.value.kind is AddRoleErrorKind.unknown


@pytest.mark.asyncio
async def test_transport_failure_is_unknown(canned):
    async with canned(exc=httpx.ConnectError) as client:
        with pytest.raises(AddRoleError) as exc:
            await add_role_to_user("u1", "editor", CORE_URL, client=client)
    assert exc.value.kind is AddRoleErrorKind.unknown


@pytest.mark.asyncio
async def test_deadline_from_config(canned):
    cfg = ServiceConfig(core_domain=CORE_URL, api_key=API_KEY, timeout_s=2.0)
    seen: list[httpx.Request] = []
    body = {"status": "OK", "didUserAlreadyHaveRole": True}
    async with canned(200, json=body, seen=seen) as client:
        await add_role_to_user("u1", "editor", CORE_URL, config=cfg, client=client)
    assert seen[0].extensions["timeout"]["read"] == 2.0


@pytest.mark.asyncio
async def test_explicit_deadline_without_config(canned):
    seen: list[httpx.Request] = []
    body = {"status": "OK", "didUserAlreadyHaveRole": True}
    async with canned(200, json=body, seen=seen) as client:
        await add_role_to_user("u1", "editor", CORE_URL, client=client, timeout=1.5)
    assert seen[0].extensions["timeout"]["read"] == 1.5
