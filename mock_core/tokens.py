"""Compact tokens minted by the mock core.

Tokens have the usual `header.claims.signature` shape, base64url without
padding. The signature is a keyed BLAKE2b digest rather than RSA: it is only
meant to be stable and checkable by the mock itself, not by third parties.
"""
from __future__ import annotations

import base64
import hashlib
import json
import time
from typing import Any

__all__ = [
    "TokenError",
    "MalformedTokenError",
    "BadSignatureError",
    "derive_kid",
    "mint_token",
    "decode_token",
]


# ------------------------
# Errors
# ------------------------
class TokenError(ValueError):
    """Base class for token-related errors."""


class MalformedTokenError(TokenError):
    """The token is not three base64url JSON segments."""


class BadSignatureError(TokenError):
    """The signature does not match the mock core's secret."""


# ------------------------
# Internals
# ------------------------
def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _dumps(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _sign(signing_input: bytes, secret: bytes) -> str:
    return _b64encode(hashlib.blake2b(signing_input, key=secret, digest_size=32).digest())


def derive_kid(secret: bytes) -> str:
    """Derive a static key id from the signing secret so it is stable across restarts."""
    return "s-" + hashlib.blake2b(secret, digest_size=8).hexdigest()


# ------------------------
# Public encode/decode
# ------------------------
def mint_token(
    *,
    payload: dict[str, Any],
    issuer: str,
    validity_s: int,
    kid: str,
    secret: bytes,
    algorithm: str = "RS256",
    now_s: int | None = None,
) -> str:
    """Return a signed token carrying `payload` plus iss/iat/exp claims.

    Caller-supplied claims win over iat/exp/iss, matching the real core.
    """
    iat = int(time.time()) if now_s is None else now_s
    claims = {"iat": iat, "exp": iat + validity_s, "iss": issuer}
    claims.update(payload)
    header = {"alg": algorithm, "typ": "JWT", "kid": kid}
    signing_input = f"{_b64encode(_dumps(header))}.{_b64encode(_dumps(claims))}".encode("ascii")
    return f"{signing_input.decode('ascii')}.{_sign(signing_input, secret)}"


def decode_token(
    token: str, *, secret: bytes | None = None
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a token into (header, claims), checking the signature if `secret` is given.

    Raises a specific `TokenError` subclass if parsing or verification fails.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError("Token must have three segments")

    try:
        header = json.loads(_b64decode(parts[0]))
        claims = json.loads(_b64decode(parts[1]))
    except ValueError as e:
        raise MalformedTokenError("Token segments are not base64url JSON") from e

    if secret is not None:
        expected = _sign(f"{parts[0]}.{parts[1]}".encode("ascii"), secret)
        if expected != parts[2]:
            raise BadSignatureError("Token signature does not match")

    return header, claims
