# ============================================================================
# FILE: music_api/main.py
# ============================================================================
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from music_api.api.errors import register_exception_handlers
from music_api.api.v1.router import api_router
from music_api.config import Settings, get_settings
from music_api.core.cache import RedisCache
from music_api.core.logging import setup_logging
from music_api.core.security import TokenService
from music_api.db.session import Database
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release connections on shutdown"""
    logger.info(f"Starting {app.state.settings.APP_NAME}")
    app.state.database.create_all()
    yield
    logger.info(f"Shutting down {app.state.settings.APP_NAME}")
    app.state.cache.close()
    app.state.database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around explicit settings, database and cache objects"""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Song, artist and playlist catalog with token-based accounts",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.cache = RedisCache(settings.REDIS_URL if settings.CACHE_ENABLED else None)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API v1 router
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "success": True,
            "status": "OK",
            "message": f"{settings.APP_NAME} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health")
    def health_check():
        database_up = app.state.database.ping()
        body = {
            "success": database_up,
            "status": "OK" if database_up else "SERVICE_UNAVAILABLE",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": {
                "status": "connected" if database_up else "disconnected",
                "dialect": app.state.database.engine.dialect.name,
            },
            "cache": {"enabled": app.state.cache.enabled},
        }
        return JSONResponse(status_code=200 if database_up else 503, content=body)

    return app


app = create_app()
