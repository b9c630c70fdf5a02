"""YogaLog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map YogaLogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Optional catalog seeding at startup (seed_catalog_on_startup); the upsert is
      idempotent so every replica may run it
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yogalog.api.error_handlers import register_error_handlers
from yogalog.api.routes import health, poses, practice_sessions, score_cards
from yogalog.config import get_settings
from yogalog.db.seed import seed_poses
from yogalog.infrastructure import database
from yogalog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.seed_catalog_on_startup:
        async with database.db_manager.session() as db:
            await seed_poses(db)
    logger.info("YogaLog API started")
    yield
    await database.db_manager.engine.dispose()
    logger.info("YogaLog API shutting down")


app = FastAPI(
    title="YogaLog API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(practice_sessions.router)
app.include_router(score_cards.router)
app.include_router(poses.router)

register_error_handlers(app)
