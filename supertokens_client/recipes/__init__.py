"""One module per core capability; each exposes a single async operation."""
from .core import get_api_versions
from .emailpassword import sign_in
from .jwt import create_jwt, get_jwks
from .roles import add_role_to_user

__all__ = ["sign_in", "create_jwt", "get_jwks", "add_role_to_user", "get_api_versions"]
