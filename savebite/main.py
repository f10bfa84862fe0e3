from __future__ import annotations

# start development server: uvicorn savebite.main:app --reload

import logging
import secrets
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from savebite import __version__
from savebite.api.v1 import auth, food, recipe
from savebite.core.config import Settings, get_settings
from savebite.core.exceptions import setup_exception_handlers
from savebite.core.logging import configure_logging
from savebite.db.init_db import init_db
from savebite.db.session import create_db_engine, create_session_factory
from savebite.security import TokenService

logger = logging.getLogger(__name__)


def _resolve_secret_key(settings: Settings) -> str:
    """Return the configured JWT secret or an ephemeral random one."""
    if settings.SECRET_KEY:
        return settings.SECRET_KEY
    logger.warning(
        "SECRET_KEY is not set; using an ephemeral secret. "
        "Issued tokens become invalid when the process restarts."
    )
    return secrets.token_urlsafe(32)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check database connectivity and create missing tables on startup."""
    engine = app.state.engine
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Cannot connect to the database")
        raise
    logger.info("Connected to the database")
    init_db(engine)

    yield

    engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        settings: Settings to use; loaded from the environment when omitted.

    Returns:
        FastAPI: Configured FastAPI app.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    engine = create_db_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings, _resolve_secret_key(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Public routers (no auth required)
    app.include_router(auth.router)

    # Protected routers (auth enforced at router level)
    app.include_router(food.router)
    app.include_router(recipe.router)

    @app.get("/", tags=["Service"])
    def root() -> Dict[str, Any]:
        """Root endpoint to verify the service is running."""
        return {"status": "ok", "service": settings.APP_NAME}

    @app.get("/health", tags=["Service"])
    def health() -> Dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/hello", tags=["Service"])
    def hello() -> Dict[str, Any]:
        """Greeting endpoint kept for serverless smoke checks."""
        return {"message": "Hello, World!"}

    return app


# ASGI entrypoint
app = create_app()
