from __future__ import annotations

from enum import Enum
from typing import ClassVar

from .domain.status import Outcome

__all__ = [
    "CoreClientError",
    "SignInErrorKind",
    "SignInError",
    "CreateJwtErrorKind",
    "CreateJwtError",
    "JwksErrorKind",
    "JwksError",
    "AddRoleErrorKind",
    "AddRoleError",
    "ApiVersionErrorKind",
    "ApiVersionError",
]


class CoreClientError(RuntimeError):
    """Base class for failed core calls.

    Subclasses own a closed `kind` enum (always with an `unknown` member) and
    a table mapping classifier outcomes onto it. Outcomes missing from the
    table become `unknown`.
    """

    kinds: ClassVar[type[Enum]]
    outcomes: ClassVar[dict[Outcome, Enum]] = {}

    def __init__(self, kind: Enum, message: str | None = None, *, status_code: int | None = None):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message or kind.value)

    @classmethod
    def from_outcome(
        cls, outcome: Outcome, message: str | None = None, *, status_code: int | None = None
    ) -> CoreClientError:
        kind = cls.outcomes.get(outcome, cls.kinds["unknown"])
        return cls(kind, message, status_code=status_code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, status_code={self.status_code!r})"


class SignInErrorKind(str, Enum):
    bad_request = "bad_request"
    wrong_credentials = "wrong_credentials"
    invalid_api_key = "invalid_api_key"
    not_found = "not_found"
    internal = "internal"
    unknown = "unknown"


class SignInError(CoreClientError):
    """Raised by `sign_in`."""

    kinds = SignInErrorKind
    outcomes = {
        Outcome.bad_request: SignInErrorKind.bad_request,
        Outcome.not_ok: SignInErrorKind.wrong_credentials,
        Outcome.invalid_api_key: SignInErrorKind.invalid_api_key,
        Outcome.not_found: SignInErrorKind.not_found,
        Outcome.internal: SignInErrorKind.internal,
    }


class CreateJwtErrorKind(str, Enum):
    bad_request = "bad_request"
    unsupported_algorithm = "unsupported_algorithm"
    not_found = "not_found"
    internal = "internal"
    unknown = "unknown"


class CreateJwtError(CoreClientError):
    """Raised by `create_jwt`.

    There is deliberately no invalid-API-key kind: a 401 here is `unknown`.
    """

    kinds = CreateJwtErrorKind
    outcomes = {
        Outcome.bad_request: CreateJwtErrorKind.bad_request,
        Outcome.not_ok: CreateJwtErrorKind.unsupported_algorithm,
        Outcome.not_found: CreateJwtErrorKind.not_found,
        Outcome.internal: CreateJwtErrorKind.internal,
    }


class JwksErrorKind(str, Enum):
    response_format = "response_format"  # body did not match the key-set schema
    internal = "internal"
    unknown = "unknown"


class JwksError(CoreClientError):
    """Raised by `get_jwks`."""

    kinds = JwksErrorKind
    outcomes = {
        Outcome.internal: JwksErrorKind.internal,
    }


class AddRoleErrorKind(str, Enum):
    bad_request = "bad_request"
    invalid_api_key = "invalid_api_key"
    user_not_found = "user_not_found"
    unknown_role = "unknown_role"
    internal = "internal"
    unknown = "unknown"


class AddRoleError(CoreClientError):
    """Raised by `add_role_to_user`."""

    kinds = AddRoleErrorKind
    outcomes = {
        Outcome.bad_request: AddRoleErrorKind.bad_request,
        Outcome.invalid_api_key: AddRoleErrorKind.invalid_api_key,
        Outcome.not_found: AddRoleErrorKind.user_not_found,
        Outcome.not_ok: AddRoleErrorKind.unknown_role,
        Outcome.internal: AddRoleErrorKind.internal,
    }


class ApiVersionErrorKind(str, Enum):
    invalid_api_key = "invalid_api_key"
    not_found = "not_found"
    internal = "internal"
    unknown = "unknown"


class ApiVersionError(CoreClientError):
    """Raised by `get_api_versions`."""

    kinds = ApiVersionErrorKind
    outcomes = {
        Outcome.invalid_api_key: ApiVersionErrorKind.invalid_api_key,
        Outcome.not_found: ApiVersionErrorKind.not_found,
        Outcome.internal: ApiVersionErrorKind.internal,
    }
