"""AuthRelay API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AuthRelayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Feed service initialized and signed in on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main only registers them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authrelay.api.error_handlers import register_error_handlers
from authrelay.api.routes import feed, health
from authrelay.config import get_settings
from authrelay.infrastructure.observability import setup_logging
from authrelay.services.feed_service import init_feed_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    service = init_feed_service(settings)
    await service.tokens.refresh()
    logger.info("AuthRelay API started")
    yield
    logger.info("AuthRelay API shutting down")


app = FastAPI(
    title="AuthRelay API", version="0.1.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(feed.router)

register_error_handlers(app)
