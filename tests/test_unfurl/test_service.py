"""Tests for UnfurlService orchestration and the background runner."""

import logging
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import httpx
import pytest
from slack_sdk.errors import SlackApiError

from creative_unfurl.config import Settings
from creative_unfurl.errors import (
    ConfigurationError,
    MalformedUpstreamResponseError,
    NoLinksPresentError,
    UpstreamUnreachableError,
)
from creative_unfurl.models.slack import LinkSharedEvent
from creative_unfurl.unfurl.service import UnfurlOutcome, UnfurlService, run_unfurl

CHANNEL = "C0AFQJHAVS6"
TS = "1234567890.123456"
LINK = "https://studio.example.com/creatives/12/6666/preview"

METADATA = {
    "brand": "brand-42",
    "creativeset": "Summer Sale",
    "size": {"width": 300, "height": 250},
    "version": "English",
    "elements": 7,
    "duration": 4.5,
    "preloadImage": "https://cdn.example.com/preload/6666.png",
}


def _settings(**overrides: object) -> Settings:
    values = {
        "slack_bot_token": "xoxb-test",
        "studio_url": "https://studio.example.com",
        "sandbox_studio_url": "https://sandbox-studio.example.com",
        "image_optimizer_url": "https://img.example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _event(*urls: str) -> LinkSharedEvent:
    return LinkSharedEvent.model_validate(
        {
            "token": "tok",
            "event_id": "Ev123",
            "event": {
                "type": "link_shared",
                "channel": CHANNEL,
                "message_ts": TS,
                "links": [{"domain": "example.com", "url": url} for url in urls],
            },
        }
    )


class _Recorder:
    """httpx MockTransport handler recording every request."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _service(
    recorder: _Recorder, slack_client: AsyncMock | None = None, **overrides: object
) -> UnfurlService:
    return UnfurlService(
        settings=_settings(**overrides),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
        slack_client=slack_client or AsyncMock(),
    )


def _make_slack_api_error(error_code: str) -> SlackApiError:
    resp = MagicMock()
    resp.get = MagicMock(
        side_effect=lambda key, default="": error_code if key == "error" else default,
    )
    return SlackApiError(message=f"slack error: {error_code}", response=resp)


# -- Success path --


async def test_creative_link_is_unfurled():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()
    service = _service(recorder, slack)

    outcome = await service.handle(_event(LINK))

    assert outcome == UnfurlOutcome.DELIVERED
    assert len(recorder.requests) == 1
    assert "creativeset=12&creative=6666" in str(recorder.requests[0].url)

    slack.chat_unfurl.assert_called_once()
    kwargs = slack.chat_unfurl.call_args.kwargs
    assert kwargs["channel"] == CHANNEL
    assert kwargs["ts"] == TS
    assert list(kwargs["unfurls"]) == [LINK]
    blocks = kwargs["unfurls"][LINK]["blocks"]
    assert blocks[2]["accessory"]["url"] == (
        "https://studio.example.com/brand/brand-42/creativeset/12"
    )


async def test_sandbox_link_uses_sandbox_studio():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()
    link = "https://sandbox-studio.example.com/creatives/3/4"

    await _service(recorder, slack).handle(_event(link))

    assert recorder.requests[0].url.host == "sandbox-studio.example.com"
    blocks = slack.chat_unfurl.call_args.kwargs["unfurls"][link]["blocks"]
    assert blocks[2]["accessory"]["url"].startswith("https://sandbox-studio.example.com/")


async def test_only_first_link_is_unfurled():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()
    other = "https://studio.example.com/creatives/99/100"

    await _service(recorder, slack).handle(_event(LINK, other))

    assert len(recorder.requests) == 1
    assert list(slack.chat_unfurl.call_args.kwargs["unfurls"]) == [LINK]


# -- Short circuits --


async def test_non_creative_link_is_ignored():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()

    outcome = await _service(recorder, slack).handle(
        _event("https://studio.example.com/other/1/2")
    )

    assert outcome == UnfurlOutcome.IGNORED
    assert recorder.requests == []
    slack.chat_unfurl.assert_not_called()


async def test_metadata_error_status_skips_unfurl():
    recorder = _Recorder(httpx.Response(500))
    slack = AsyncMock()

    outcome = await _service(recorder, slack).handle(_event(LINK))

    assert outcome == UnfurlOutcome.SKIPPED
    slack.chat_unfurl.assert_not_called()


async def test_empty_links_raises():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    with pytest.raises(NoLinksPresentError):
        await _service(recorder).handle(_event())
    assert recorder.requests == []


# -- Failures --


async def test_metadata_transport_error_raises():
    recorder = _Recorder(httpx.ConnectError("refused"))
    slack = AsyncMock()

    with pytest.raises(UpstreamUnreachableError):
        await _service(recorder, slack).handle(_event(LINK))
    slack.chat_unfurl.assert_not_called()


async def test_malformed_metadata_raises():
    recorder = _Recorder(httpx.Response(200, text="not json"))
    slack = AsyncMock()

    with pytest.raises(MalformedUpstreamResponseError):
        await _service(recorder, slack).handle(_event(LINK))
    slack.chat_unfurl.assert_not_called()


async def test_missing_bot_token_raises_before_posting():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()

    with pytest.raises(ConfigurationError):
        await _service(recorder, slack, slack_bot_token="").handle(_event(LINK))
    slack.chat_unfurl.assert_not_called()


async def test_slack_rejection_is_not_an_error():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()
    slack.chat_unfurl.side_effect = _make_slack_api_error("cannot_unfurl_url")

    outcome = await _service(recorder, slack).handle(_event(LINK))

    assert outcome == UnfurlOutcome.REJECTED


async def test_slack_transport_error_raises():
    recorder = _Recorder(httpx.Response(200, json=METADATA))
    slack = AsyncMock()
    slack.chat_unfurl.side_effect = aiohttp.ClientConnectionError("reset by peer")

    with pytest.raises(UpstreamUnreachableError) as exc_info:
        await _service(recorder, slack).handle(_event(LINK))

    assert exc_info.value.target == "slack"


# -- run_unfurl --


async def test_run_unfurl_swallows_upstream_errors(caplog: pytest.LogCaptureFixture):
    recorder = _Recorder(httpx.ConnectError("refused"))

    with caplog.at_level(logging.ERROR, logger="creative_unfurl.unfurl.service"):
        await run_unfurl(_service(recorder), _event(LINK))

    assert any("Unfurl failed for event Ev123" in r.getMessage() for r in caplog.records)


async def test_run_unfurl_treats_empty_links_as_noop(caplog: pytest.LogCaptureFixture):
    recorder = _Recorder(httpx.Response(200, json=METADATA))

    with caplog.at_level(logging.INFO, logger="creative_unfurl.unfurl.service"):
        await run_unfurl(_service(recorder), _event())

    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert recorder.requests == []
