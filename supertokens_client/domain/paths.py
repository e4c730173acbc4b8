from __future__ import annotations

from ..config import ServiceConfig

__all__ = [
    "ENDPOINT_SIGNIN",
    "ENDPOINT_JWT",
    "ENDPOINT_JWKS",
    "ENDPOINT_USER_ROLE",
    "ENDPOINT_API_VERSION",
    "app_url",
    "tenant_url",
    "raw_url",
]

ENDPOINT_SIGNIN = "recipe/signin"
ENDPOINT_JWT = "recipe/jwt"
ENDPOINT_JWKS = ".well-known/jwks.json"
ENDPOINT_USER_ROLE = "recipe/user/role"
ENDPOINT_API_VERSION = "apiversion"


def _check_fragment(path: str) -> str:
    """Reject fragments that would produce an empty or doubled separator.

    Raises:
        ValueError: if `path` is empty or starts with "/".
    """
    if not isinstance(path, str) or not path:
        raise ValueError("endpoint path must be a non-empty string")
    if path.startswith("/"):
        raise ValueError(f"endpoint path must not start with '/': {path!r}")
    return path


def app_url(config: ServiceConfig, path: str) -> str:
    """`{core_domain}/appid-{app_id}/{path}`"""
    path = _check_fragment(path)
    return f"{config.core_domain}/appid-{config.app_id}/{path}"


def tenant_url(config: ServiceConfig, path: str) -> str:
    """`{core_domain}/appid-{app_id}/{tenant_id}/{path}`"""
    path = _check_fragment(path)
    return f"{config.core_domain}/appid-{config.app_id}/{config.tenant_id}/{path}"


def raw_url(base: str, path: str) -> str:
    """Append `path` to an unscoped base URL, with exactly one "/" between them."""
    path = _check_fragment(path)
    return f"{base.rstrip('/')}/{path}"
