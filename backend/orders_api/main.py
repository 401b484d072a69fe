"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from orders_api.api import health_router, method_not_allowed_handler, orders_router
from orders_api.config import settings
from orders_api.logging import setup_logging

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    missing = settings.missing_store_settings
    if missing:
        # Requests still get a 500 each; this only surfaces it at boot
        logger.warning("Orders API store is not configured", missing=missing)
    else:
        logger.info(
            "Starting Orders API",
            repo=f"{settings.github_owner}/{settings.github_repo}",
            branch=settings.github_branch,
            path=settings.store_data_path,
        )

    yield

    logger.info("Shutting down Orders API")


app = FastAPI(
    title="Store Orders API",
    description="Records storefront orders in a JSON document on GitHub",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS is handled per response by the orders router, not by middleware
app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)  # type: ignore[arg-type]

app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(orders_router, prefix="/api", tags=["orders"])
