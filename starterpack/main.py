"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from starterpack.api.v1 import router as v1_router
from starterpack.core.config import Settings, get_settings
from starterpack.core.database import Database
from starterpack.core.errors import InternalError, StarterPackError

logger = logging.getLogger(__name__)


def _error_response(exc: StarterPackError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one Settings instance; the database lives for the lifespan."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.database = Database(settings)
        logger.info("Database engine created", extra={"app_env": settings.APP_ENV})
        try:
            yield
        finally:
            app.state.database.dispose()

    app = FastAPI(
        title="StarterPack API",
        version="0.1.0",
        description="Users, password login and Google sign-in",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarterPackError)
    async def handle_starterpack_error(_request: Request, exc: StarterPackError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"error_type": type(exc).__name__, "reason": exc.message[:500]},
            )
        return _error_response(exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error: %s", type(exc).__name__)
        return _error_response(InternalError())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error: %s", type(exc).__name__)
        return _error_response(InternalError())

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Welcome to the StarterPack API"}

    return app


app = create_app()
