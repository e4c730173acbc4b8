from __future__ import annotations

from enum import Enum

from ..config import ServiceConfig

__all__ = [
    "HEADER_RID",
    "HEADER_API_KEY",
    "HEADER_CDI_VERSION",
    "Capability",
    "build_headers",
]

HEADER_RID = "rid"
HEADER_API_KEY = "api-key"
HEADER_CDI_VERSION = "cdi-version"


class Capability(str, Enum):
    """Recipe ids understood by the core's `rid` header."""

    email_password = "emailpassword"
    passwordless = "passwordless"
    third_party = "thirdparty"
    jwt = "jwt"


def build_headers(config: ServiceConfig, capability: Capability | None = None) -> dict[str, str]:
    """Return the auth headers for one request.

    `api-key` and `cdi-version` are always present; `rid` only when a
    capability applies to the call.
    """
    headers = {
        HEADER_API_KEY: config.api_key,
        HEADER_CDI_VERSION: config.cdi_version,
    }
    if capability is not None:
        headers[HEADER_RID] = capability.value
    return headers
