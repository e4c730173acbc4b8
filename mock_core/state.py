from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from uuid import uuid4

from supertokens_client.logging_conf import get_logger
from supertokens_client.models import Jwk, LoginMethod, User

from .tokens import derive_kid

logger = get_logger("mock_core.state")

SUPPORTED_VERSIONS = ["2.21", "3.0", "4.0"]
SUPPORTED_ALGORITHMS = frozenset({"RS256"})


def now_ms() -> int:
    """Return current time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Account:
    password: str
    user: User


@dataclass
class CoreState:
    """Everything the mock core remembers between requests.

    An empty `api_key` disables the api-key check, as on a core started
    without one.
    """

    api_key: str = ""
    secret: bytes = b"mock-core-signing-secret"
    app_ids: set[str] = field(default_factory=lambda: {"public"})
    tenant_ids: set[str] = field(default_factory=lambda: {"public"})
    accounts: dict[str, Account] = field(default_factory=dict)  # keyed by email
    roles: dict[str, set[str]] = field(default_factory=dict)  # role -> user ids

    @property
    def kid(self) -> str:
        return derive_kid(self.secret)

    def jwk(self) -> Jwk:
        return Jwk(alg="RS256", kty="RSA", key_use="sig", kid=self.kid, x5c=[])

    def add_user(self, email: str, password: str, *, tenant_id: str = "public") -> User:
        """Create an email/password user and return it."""
        user_id = str(uuid4())
        joined = now_ms()
        user = User(
            id=user_id,
            is_primary_user=False,
            tenant_ids=[tenant_id],
            time_joined=joined,
            emails=[email],
            login_methods=[
                LoginMethod(
                    tenant_ids=[tenant_id],
                    recipe_user_id=user_id,
                    verified=False,
                    time_joined=joined,
                    recipe_id="emailpassword",
                    email=email,
                )
            ],
        )
        self.accounts[email] = Account(password=password, user=user)
        logger.info("user.create", extra={"event": "user_create", "user_id": user_id})
        return user

    def add_role(self, role: str) -> None:
        self.roles.setdefault(role, set())

    def user_ids(self) -> set[str]:
        return {a.user.id for a in self.accounts.values()}


def state_from_env() -> CoreState:
    """Build a seeded state from MOCK_CORE_* variables.

    MOCK_CORE_API_KEY, MOCK_CORE_USER ("email:password"), MOCK_CORE_ROLES
    (comma separated).
    """
    state = CoreState(api_key=os.getenv("MOCK_CORE_API_KEY", ""))
    seed_user = os.getenv("MOCK_CORE_USER")
    if seed_user:
        email, sep, password = seed_user.partition(":")
        if not sep:
            raise ValueError("MOCK_CORE_USER must look like email:password")
        state.add_user(email, password)
    for role in os.getenv("MOCK_CORE_ROLES", "").split(","):
        if role.strip():
            state.add_role(role.strip())
    return state
