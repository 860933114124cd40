"""FacebookAds — FastAPI Application Entry Point.

Serves read-only views over the Marketing Graph API records.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from facebook_ads.api.routes import router as meta_router
from facebook_ads.client import get_client
from facebook_ads.config import settings
from facebook_ads.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(f"FacebookAds starting up against {settings.base_uri}")
    if not settings.meta_access_token:
        logger.warning("No access token configured; Graph calls will be rejected")
    yield
    await get_client().close()
    logger.info("FacebookAds shut down")


app = FastAPI(
    title="FacebookAds",
    description="Read-only views over Facebook Marketing API ad accounts, campaigns, ad sets, ads and insights.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(meta_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "facebook_ads",
        "version": "1.0.0",
        "base_uri": settings.base_uri,
    }
