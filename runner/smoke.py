#!/usr/bin/env python3
"""Smoke run of the client against a live (or mock) core.

Steps:
- wait for /hello
- list supported CDI versions
- sign in with the given email/password
- mint a token for the signed-in user
- fetch the verification key set and check the token's kid is in it
- optionally grant a role
- emit a compact JSON summary and exit code
"""
from __future__ import annotations

import asyncio
import base64
import json
import sys
import time
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from runner.cli import parse_args
from runner.client import wait_for_core
from runner.types import SmokeError, StepResult
from supertokens_client import (
    CoreClientError,
    ServiceConfig,
    add_role_to_user,
    create_jwt,
    get_api_versions,
    get_jwks,
    sign_in,
)
from supertokens_client.logging_conf import get_logger, setup_logging

logger = get_logger("runner")


async def _step(
    results: list[StepResult], name: str, fn: Callable[[], Awaitable[Any]]
) -> Any:
    """Run one step, record its result and re-raise client errors as SmokeError."""
    started = time.perf_counter()
    try:
        value = await fn()
    except CoreClientError as e:
        elapsed = (time.perf_counter() - started) * 1000.0
        results.append(
            StepResult(
                name=name,
                ok=False,
                elapsed_ms=round(elapsed, 2),
                detail={"kind": e.kind.value, "status_code": e.status_code},
            )
        )
        raise SmokeError(f"{name} failed: {e.kind.value}") from e
    elapsed = (time.perf_counter() - started) * 1000.0
    results.append(StepResult(name=name, ok=True, elapsed_ms=round(elapsed, 2)))
    logger.info("step.ok", extra={"event": "step_ok", "step": name})
    return value


def _token_kid(token: str) -> str | None:
    head = token.split(".")[0]
    try:
        return json.loads(base64.urlsafe_b64decode(head + "=" * (-len(head) % 4))).get("kid")
    except ValueError:
        return None


async def run_smoke(
    *,
    config: ServiceConfig,
    email: str,
    password: str,
    role: str | None = None,
    wait_s: float = 20.0,
    client: httpx.AsyncClient | None = None,
) -> int:
    results: list[StepResult] = []
    owned = client is None
    client = client or httpx.AsyncClient(timeout=config.timeout_s)
    try:
        await wait_for_core(client, config.core_domain, timeout_s=wait_s)
        versions = await _step(
            results, "api_versions", lambda: get_api_versions(config, client=client)
        )
        if config.cdi_version not in versions:
            logger.warning(
                "cdi.unsupported",
                extra={
                    "event": "cdi_unsupported",
                    "cdi_version": config.cdi_version,
                    "versions": versions,
                },
            )

        signed_in = await _step(
            results, "sign_in", lambda: sign_in(config, email, password, client=client)
        )
        token = await _step(
            results,
            "create_jwt",
            lambda: create_jwt(config, {"sub": signed_in.user_id}, client=client),
        )
        keys = await _step(
            results, "get_jwks", lambda: get_jwks(config.core_domain, config=config, client=client)
        )
        kid = _token_kid(token)
        if kid is not None and keys.find(kid) is None:
            results.append(
                StepResult(name="kid_match", ok=False, elapsed_ms=0.0, detail={"kid": kid})
            )
            raise SmokeError(f"token kid {kid} not in key set")

        if role:
            already = await _step(
                results,
                "add_role",
                lambda: add_role_to_user(
                    signed_in.user_id, role, config.core_domain, config=config, client=client
                ),
            )
            results[-1].detail["already_had_role"] = already
    except SmokeError as e:
        logger.error("runner.failed", extra={"event": "runner_failed", "error": str(e)})
    finally:
        if owned:
            await client.aclose()

    ok = bool(results) and all(r.ok for r in results)
    summary = {
        "component": "runner",
        "event": "summary",
        "ok": ok,
        "steps": [r.__dict__ for r in results],
    }
    logger.info("runner.summary", extra=summary)
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> None:
    setup_logging()
    args = parse_args(argv if argv is not None else sys.argv[1:])
    config = ServiceConfig(
        core_domain=args.core_url,
        api_key=args.api_key,
        app_id=args.app_id,
        tenant_id=args.tenant_id,
        timeout_s=args.timeout,
    )
    code = asyncio.run(
        run_smoke(
            config=config,
            email=args.email,
            password=args.password,
            role=args.role,
            wait_s=args.wait,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
