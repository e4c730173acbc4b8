"""In-memory stand-in for the SuperTokens core.

Serves the endpoints the client talks to so the client can be exercised end
to end without a real core (tests mount it through `httpx.ASGITransport`).
"""
from .main import create_app
from .state import CoreState

__all__ = ["create_app", "CoreState"]
