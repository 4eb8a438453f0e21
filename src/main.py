"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import Settings, settings
from src.wl_account.api.router import router as account_router
from src.wl_bet.api.router import router as bet_router
from src.wl_common.database import create_engine, create_session_factory
from src.wl_common.errors import AppError, IntegrityViolationError
from src.wl_common.request_log import RequestLogMiddleware
from src.wl_common.response import error_response, request_id_of
from src.wl_ledger.api.router import router as ledger_router

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: build the engine and verify the DB. Shutdown: dispose it."""
        engine = create_engine(app_settings)
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, IntegrityViolationError):
            logger.error("Integrity violation on %s: %s %s", request.url.path, exc.message, exc.context)
        resp = error_response(exc, request_id_of(request))
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(mode="json"),
        )

    app.include_router(account_router, prefix="/api/v1")
    app.include_router(ledger_router, prefix="/api/v1")
    app.include_router(bet_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": APP_VERSION}

    return app


app = create_app()
