"""Villa API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as an APIResponse envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from villa_api import __version__
from villa_api.api.error_handlers import register_error_handlers
from villa_api.api.routes import health, villa_numbers
from villa_api.config import get_settings
from villa_api.core.domain_types import ApiVersion
from villa_api.infrastructure.database import init_db
from villa_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings)
    logger.info(
        "Villa API started",
        extra={"api_version": ",".join(v.value for v in ApiVersion)},
    )
    yield
    await manager.dispose()
    logger.info("Villa API shutting down")


app = FastAPI(
    title="Villa API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router)
app.include_router(villa_numbers.router_v1)
app.include_router(villa_numbers.router_v2)

register_error_handlers(app)
