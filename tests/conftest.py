"""Shared test fixtures."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from creative_unfurl.app import app
from creative_unfurl.config import Settings
from creative_unfurl.slack.router import get_unfurl_service
from creative_unfurl.unfurl.service import UnfurlService

CREATIVE_METADATA = {
    "brand": "brand-42",
    "creativeset": "Summer Sale",
    "size": {"width": 300, "height": 250},
    "version": "English",
    "elements": 7,
    "duration": 4.5,
    "preloadImage": "https://cdn.example.com/preload/6666.png",
}


class MetadataStub:
    """httpx MockTransport handler standing in for the studio metadata endpoint."""

    def __init__(self, response: httpx.Response | Exception | None = None) -> None:
        if response is None:
            response = httpx.Response(200, json=CREATIVE_METADATA)
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def metadata_stub() -> MetadataStub:
    return MetadataStub()


@pytest.fixture
def slack_client() -> AsyncMock:
    """Fake Slack Web API client; chat_unfurl calls are recorded."""
    return AsyncMock()


@pytest.fixture
def unfurl_service(metadata_stub: MetadataStub, slack_client: AsyncMock) -> UnfurlService:
    settings = Settings(
        _env_file=None,
        slack_bot_token="xoxb-test",
        studio_url="https://studio.example.com",
        sandbox_studio_url="https://sandbox-studio.example.com",
        image_optimizer_url="https://img.example.com",
    )
    return UnfurlService(
        settings=settings,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(metadata_stub)),
        slack_client=slack_client,
    )


@pytest.fixture
def client(unfurl_service: UnfurlService) -> Iterator[TestClient]:
    """TestClient with the lifespan running and the unfurl service replaced."""
    app.dependency_overrides[get_unfurl_service] = lambda: unfurl_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
