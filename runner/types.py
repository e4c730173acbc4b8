from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class StepResult:
    """Outcome of one smoke step."""

    name: str
    ok: bool
    elapsed_ms: float
    detail: dict = field(default_factory=dict)


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., core never ready)."""


class CoreUnavailableError(SmokeError):
    """Raised when /hello does not answer within the wait budget."""
