from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "DEFAULT_APP_ID",
    "DEFAULT_TENANT_ID",
    "DEFAULT_CDI_VERSION",
    "DEFAULT_TIMEOUT_S",
    "ServiceConfig",
]

# Defaults published by the core's CDI 4.0 API description.
DEFAULT_APP_ID = "public"
DEFAULT_TENANT_ID = "public"
DEFAULT_CDI_VERSION = "4.0"
DEFAULT_TIMEOUT_S = 10.0


class ServiceConfig(BaseModel):
    """Connection settings for one core instance.

    Built once by the host application and passed to every call. Instances are
    frozen so a config can be shared freely between concurrent requests.
    """

    model_config = ConfigDict(frozen=True)

    core_domain: str  # base URL, stored without a trailing "/"
    api_key: str = ""
    app_id: str = DEFAULT_APP_ID
    tenant_id: str = DEFAULT_TENANT_ID
    cdi_version: str = DEFAULT_CDI_VERSION
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @field_validator("core_domain")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("core_domain must be a non-empty URL")
        return value

    @classmethod
    def from_env(cls, prefix: str = "SUPERTOKENS_") -> ServiceConfig:
        """Build a config from `{prefix}CORE_DOMAIN`, `{prefix}API_KEY`, etc.

        Unset optional variables fall back to the CDI defaults.
        """
        domain = os.getenv(f"{prefix}CORE_DOMAIN")
        if not domain:
            raise ValueError(f"{prefix}CORE_DOMAIN must be set")

        raw_timeout = os.getenv(f"{prefix}TIMEOUT_S")
        try:
            timeout_s = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_S
        except ValueError as e:
            raise ValueError(f"{prefix}TIMEOUT_S must be a number") from e

        return cls(
            core_domain=domain,
            api_key=os.getenv(f"{prefix}API_KEY", ""),
            app_id=os.getenv(f"{prefix}APP_ID", DEFAULT_APP_ID),
            tenant_id=os.getenv(f"{prefix}TENANT_ID", DEFAULT_TENANT_ID),
            cdi_version=os.getenv(f"{prefix}CDI_VERSION", DEFAULT_CDI_VERSION),
            timeout_s=timeout_s,
        )
