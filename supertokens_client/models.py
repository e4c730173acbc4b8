"""Request and response bodies exchanged with the core.

Field names are snake_case in Python and lower camel case on the wire; every
model shares `WireModel.model_config` so the mapping is applied uniformly.
Serialize with `model.model_dump(by_alias=True, mode="json")`.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Fixed token-issuance policy.
JWT_ALGORITHM = "RS256"
DEFAULT_JWT_VALIDITY_S = 86400
MAX_JWT_VALIDITY_S = 2**32 - 1  # `validity` is an unsigned 32-bit field


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------
# Users
# ------------------------
class ThirdPartyInfo(WireModel):
    id: str
    user_id: str


class LoginMethod(WireModel):
    """One way a user can sign in (email/password, passwordless, third party)."""
    tenant_ids: list[str]
    recipe_user_id: str
    verified: bool
    time_joined: int
    recipe_id: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    third_party: Optional[ThirdPartyInfo] = None


class User(WireModel):
    id: str
    is_primary_user: bool
    tenant_ids: list[str]
    time_joined: int
    emails: list[str] = Field(default_factory=list)
    phone_numbers: list[str] = Field(default_factory=list)
    third_party: list[ThirdPartyInfo] = Field(default_factory=list)
    login_methods: list[LoginMethod] = Field(default_factory=list)


# ------------------------
# Sign-in
# ------------------------
class SignInRequest(WireModel):
    email: str
    password: str


class SignInResponse(WireModel):
    status: str
    user: Optional[User] = None
    recipe_user_id: Optional[str] = None


class SignInSuccess(WireModel):
    """A signed-in user plus the id of the recipe user that matched."""
    user: User
    user_id: str


# ------------------------
# Token issuance
# ------------------------
class CreateJwtRequest(WireModel):
    payload: Any
    algorithm: str = JWT_ALGORITHM
    jwks_domain: str  # used as the token's issuer claim
    validity: int = Field(default=DEFAULT_JWT_VALIDITY_S, ge=0, le=MAX_JWT_VALIDITY_S)  # seconds
    use_static_signing_key: bool = True


class CreateJwtResponse(WireModel):
    status: str
    jwt: Optional[str] = None


# ------------------------
# Key retrieval
# ------------------------
class Jwk(WireModel):
    """A public key that verifies tokens issued by the core."""
    alg: str
    kty: str
    key_use: str = Field(alias="use")
    kid: str
    # First entry verifies tokens; the rest verify the first.
    x5c: list[str] = Field(default_factory=list)
    n: Optional[str] = None
    e: Optional[str] = None


class JwkSet(WireModel):
    keys: list[Jwk]

    def find(self, kid: str) -> Optional[Jwk]:
        return next((k for k in self.keys if k.kid == kid), None)


# ------------------------
# Roles
# ------------------------
class AddRoleRequest(WireModel):
    user_id: str
    role: str


class AddRoleResponse(WireModel):
    status: str
    did_user_already_have_role: Optional[bool] = None


# ------------------------
# Core metadata
# ------------------------
class ApiVersionResponse(WireModel):
    versions: list[str]
