import httpx
import pytest
from conftest import CORE_URL

from supertokens_client import ApiVersionError, ServiceConfig, get_api_versions
from supertokens_client.errors import ApiVersionErrorKind


@pytest.mark.asyncio
async def test_versions_from_mock_core(config, core_client):
    async with core_client() as client:
        versions = await get_api_versions(config, client=client)
    assert "4.0" in versions


@pytest.mark.asyncio
async def test_versions_request_has_no_rid(config, canned):
    seen: list[httpx.Request] = []
    async with canned(200, json={"versions": ["4.0"]}, seen=seen) as client:
        await get_api_versions(config, client=client)
    assert str(seen[0].url) == f"{CORE_URL}/apiversion"
    assert "rid" not in seen[0].headers


@pytest.mark.asyncio
async def test_versions_invalid_api_key(core_client):
    cfg = ServiceConfig(core_domain=CORE_URL, api_key="wrong")
    async with core_client() as client:
        with pytest.raises(ApiVersionError) as exc:
            await get_api_versions(cfg, client=client)
    assert exc.value.kind is ApiVersionErrorKind.invalid_api_key


@pytest.mark.asyncio
async def test_versions_malformed_body(config, canned):
    async with canned(200, json={"version": "4.0"}) as client:
        with pytest.raises(ApiVersionError) as exc:
            await get_api_versions(config, client=client)
    assert exc.value.kind is ApiVersionErrorKind.unknown
