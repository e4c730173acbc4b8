"""Typed async client for the SuperTokens core HTTP API.

Public entry points are re-exported here; see `supertokens_client.recipes`
for the individual operations.
"""
from importlib.metadata import PackageNotFoundError, version

from .config import ServiceConfig
from .domain.headers import Capability
from .errors import (
    AddRoleError,
    ApiVersionError,
    CoreClientError,
    CreateJwtError,
    JwksError,
    SignInError,
)
from .recipes import add_role_to_user, create_jwt, get_api_versions, get_jwks, sign_in

try:
    __version__ = version("supertokens-core-client")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "ServiceConfig",
    "Capability",
    "CoreClientError",
    "SignInError",
    "CreateJwtError",
    "JwksError",
    "AddRoleError",
    "ApiVersionError",
    "sign_in",
    "create_jwt",
    "get_jwks",
    "add_role_to_user",
    "get_api_versions",
]
