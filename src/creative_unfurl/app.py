"""FastAPI application with lifespan and health endpoint."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from creative_unfurl.config import get_settings
from creative_unfurl.logging_config import configure_logging
from creative_unfurl.slack.client import build_slack_client
from creative_unfurl.slack.router import router as slack_router
from creative_unfurl.unfurl.service import UnfurlService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, load config, and build the shared outbound clients."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(float(settings.http_timeout_seconds)),
    ) as http_client:
        app.state.unfurl_service = UnfurlService(
            settings=settings,
            http_client=http_client,
            slack_client=build_slack_client(settings),
        )
        yield


app = FastAPI(
    title="Creative Unfurl",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint for hosted runtimes and local development."""
    return {
        "status": "ok",
        "service": "creative-unfurl",
        "version": "0.1.0",
    }
