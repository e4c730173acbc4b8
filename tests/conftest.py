from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from mock_core import CoreState, create_app
from supertokens_client import ServiceConfig

CORE_URL = "http://core.test"
API_KEY = "test-api-key"
EMAIL = "alice@example.com"
PASSWORD = "correct horse battery staple"


@pytest.fixture
def config() -> ServiceConfig:
    return ServiceConfig(core_domain=CORE_URL, api_key=API_KEY)


@pytest.fixture
def core_state() -> CoreState:
    """A mock core with one user and two roles."""
    state = CoreState(api_key=API_KEY)
    state.add_user(EMAIL, PASSWORD)
    state.add_role("admin")
    state.add_role("editor")
    return state


@pytest.fixture
def core_client(core_state: CoreState) -> Callable[[], httpx.AsyncClient]:
    """Factory for clients routed in-process to the mock core."""
    app = create_app(core_state)

    def _make() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app))

    return _make


@pytest.fixture
def canned() -> Callable[..., httpx.AsyncClient]:
    """Factory for clients that answer every request with one fixed response.

    - `json` / `text` set the body; `exc` raises that transport error instead
    - Requests are appended to `seen` when a list is given
    """

    def _make(
        status_code: int = 200,
        *,
        json: object = None,
        text: str = "",
        exc: type[httpx.TransportError] | None = None,
        seen: list[httpx.Request] | None = None,
    ) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            if exc is not None:
                raise exc("simulated transport failure", request=request)
            if json is not None:
                return httpx.Response(status_code, json=json)
            return httpx.Response(status_code, text=text)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
