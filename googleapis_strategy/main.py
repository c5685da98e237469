"""
FastAPI application exposing the Google OAuth2 strategy.

This module wires dependencies and configures the application.
Strategy logic is in googleapis_strategy/core, adapters in
googleapis_strategy/infrastructure.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import UTC, datetime

# Configure logging FIRST, before other local imports
from googleapis_strategy.logging_config import setup_global_logging

setup_global_logging()

from fastapi import FastAPI  # noqa: E402

from googleapis_strategy.oauth import router as auth_router  # noqa: E402
from googleapis_strategy.oauth.config import get_oauth_settings  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Reports at startup whether the strategy can be used.
    """
    settings = get_oauth_settings()
    logger.info(
        "Application starting up...",
        extra={"google_configured": settings.is_configured()},
    )
    yield
    logger.info("Shutting down application...")


app = FastAPI(
    title="Google APIs Strategy",
    description="Google OAuth2 authorization-code authentication",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "googleapis-strategy",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}


app.include_router(auth_router.router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
