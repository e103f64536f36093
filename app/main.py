"""Vendors Service — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ServiceUnavailableError, register_exception_handlers
from app.core.security import build_auth_client
from app.db.base import engine, get_db, ping
from app.schemas.common import HealthResponse
from app.services.notifications import Notifier

# v1 routers
from app.routers.v1.branches import router as branches_v1_router
from app.routers.v1.favorites import router as favorites_v1_router
from app.routers.v1.reviews import router as reviews_v1_router
from app.routers.v1.vendors import router as vendors_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    http = httpx.AsyncClient()
    app.state.auth_client = build_auth_client(http)
    app.state.notifier = Notifier(http, settings.webhook_urls, settings.webhook_timeout)
    logger.info(
        "Starting %s (env=%s, %d webhook subscriber(s))",
        settings.app_name, settings.app_env, len(settings.webhook_urls),
    )
    try:
        yield
    finally:
        await app.state.notifier.drain()
        await http.aclose()
        await engine.dispose()
        logger.info("Shutdown complete")


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(vendors_v1_router, prefix="/api/v1")
    app.include_router(branches_v1_router, prefix="/api/v1")
    app.include_router(favorites_v1_router, prefix="/api/v1")
    app.include_router(reviews_v1_router, prefix="/api/v1")

    # --- Uploaded menu images ---
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health(session: AsyncSession = Depends(get_db)):
        try:
            await ping(session)
        except Exception as exc:
            logger.error("Health check: database unreachable: %s", exc)
            raise ServiceUnavailableError("Database unreachable") from exc
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
