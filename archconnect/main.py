"""FastAPI application entry point.

Configures CORS, structured logging, exception handlers, lifespan events,
and router registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from archconnect.core.config import settings
from archconnect.core.exceptions import (
    ArchConnectError,
    archconnect_exception_handler,
    unexpected_exception_handler,
)
from archconnect.core.logging import setup_logging
from archconnect.routers import architects, auth, dashboard, designs, health, posts, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    setup_logging()
    logger.info("Application starting up")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="ArchConnect API",
    description="Marketplace connecting architects who publish design portfolios "
    "with homeowners who browse and hire them",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception Handlers
# ---------------------------------------------------------------------------
app.add_exception_handler(ArchConnectError, archconnect_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unexpected_exception_handler)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(architects.router, prefix="/api/v1/architects", tags=["Architects"])
app.include_router(posts.router, prefix="/api/v1/posts", tags=["Posts"])
app.include_router(designs.router, prefix="/api/v1/designs", tags=["Designs"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
