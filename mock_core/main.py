"""FastAPI app factory for the mock core, with request logging and /hello."""
from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from supertokens_client.logging_conf import get_logger, setup_logging

from .routes import BadInputError
from .routes import router as core_router
from .state import CoreState, state_from_env

logger = get_logger("mock_core")


def create_app(state: CoreState | None = None) -> FastAPI:
    """Build the mock core around `state` (seeded from MOCK_CORE_* env if None)."""
    app = FastAPI(
        title="SuperTokens core (mock)",
        version=os.getenv("APP_VERSION", "0.1.0"),
    )
    app.state.core = state if state is not None else state_from_env()

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info("startup", extra={"event": "startup"})

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """Log start/end of each request with a correlation id.

        - Reuses an incoming X-Request-ID, otherwise mints one
        - Echoes X-Request-ID on the response
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "rid": request.headers.get("rid"),
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    @app.exception_handler(BadInputError)
    async def _bad_input(request: Request, exc: BadInputError) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=400)

    @app.get("/hello", summary="Liveness check")
    async def hello() -> PlainTextResponse:
        return PlainTextResponse("Hello")

    app.include_router(core_router)
    return app


SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _align_server_loggers(level: int) -> None:
    """Route the ASGI server's loggers through the root JSON handler."""
    for name in SERVER_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def build_app() -> FastAPI:
    """ASGI factory: `uvicorn mock_core.main:build_app --factory --port 3567`."""
    _align_server_loggers(setup_logging())
    return create_app()
