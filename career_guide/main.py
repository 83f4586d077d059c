"""
Career Guide API - Main Application

FastAPI backend with:
- PostgreSQL (via SQLAlchemy) for streams, careers, colleges, courses, exams,
  feedback and user preferences
- In-process TTL cache for the read endpoints

Run: uvicorn career_guide.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from career_guide import __version__
from career_guide.api.routes import api_router
from career_guide.core.cache import TTLCache
from career_guide.core.config import Settings, get_settings
from career_guide.core.errors import register_error_handlers
from career_guide.core.logging import configure_logging
from career_guide.db.database import dispose_engine, get_db, get_engine, ping
from career_guide.db.tables import create_tables
from career_guide.schemas.schemas import HealthResponse

logger = logging.getLogger(__name__)


def build_cache(settings: Settings) -> TTLCache:
    return TTLCache(
        max_entries=settings.cache_max_entries,
        default_ttl=settings.cache_ttl_seconds,
        sweep_interval=settings.cache_sweep_interval_seconds,
    )


def create_app(settings: Optional[Settings] = None, cache: Optional[TTLCache] = None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Career Guide API %s", __version__)
        if settings.create_tables_on_startup:
            try:
                create_tables(get_engine())
                logger.info("Database tables ready")
            except Exception as e:
                logger.warning("Table creation failed: %s", e)
        app.state.cache.start_sweeper()
        try:
            yield
        finally:
            await app.state.cache.stop_sweeper()
            dispose_engine()
            logger.info("Career Guide API stopped")

    app = FastAPI(
        title="Career Guide API",
        description="""
        Career guidance for secondary-school students.

        ## Features
        - **Streams**: Career categories with their courses and entrance exams
        - **Careers**: Salary insights with search, filters and sorting
        - **Colleges**: Local college search
        - **Feedback**: Contact form submissions
        - **User Preferences**: District, streams of interest and marks per user
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.cache = cache if cache is not None else build_cache(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request, db: Session = Depends(get_db)):
        """Database reachability and cache statistics."""
        return HealthResponse(
            status="healthy",
            database="connected" if ping(db) else "disconnected",
            cache=request.app.state.cache.stats(),
        )

    return app


app = create_app()
