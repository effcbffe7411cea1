"""Link-shared orchestration: parse -> fetch metadata -> build blocks -> chat.unfurl."""

import logging
from enum import Enum

import httpx
from slack_sdk.web.async_client import AsyncWebClient

from creative_unfurl.config import Settings
from creative_unfurl.errors import ConfigurationError, NoLinksPresentError, UnfurlError
from creative_unfurl.models.slack import LinkSharedEvent
from creative_unfurl.slack.client import post_unfurl
from creative_unfurl.unfurl.blocks import build_unfurl_message
from creative_unfurl.unfurl.environment import editor_url, resolve_environment
from creative_unfurl.unfurl.metadata import fetch_creative_metadata
from creative_unfurl.unfurl.urls import extract_creative_ids

logger = logging.getLogger(__name__)


class UnfurlOutcome(str, Enum):
    """Terminal state of one unfurl attempt."""

    IGNORED = "ignored"  # Link is not a creative link
    SKIPPED = "skipped"  # Metadata service answered non-2xx
    REJECTED = "rejected"  # Slack refused the unfurl
    DELIVERED = "delivered"


class UnfurlService:
    """Unfurls shared creative links into Slack previews.

    Settings and both HTTP clients are injected at construction; the service
    keeps no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        slack_client: AsyncWebClient,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self.slack_client = slack_client

    async def handle(self, event: LinkSharedEvent) -> UnfurlOutcome:
        """Unfurl the first link of a link_shared event.

        Raises NoLinksPresentError for an empty links array,
        UpstreamUnreachableError on transport failures,
        MalformedUpstreamResponseError on unusable metadata, and
        ConfigurationError when no bot token is configured.
        """
        links = event.event.links
        if not links:
            raise NoLinksPresentError(f"Event {event.event_id} has no links")

        link = links[0]
        ids = extract_creative_ids(link.url)
        if ids is None:
            logger.info("Ignoring non-creative link: %s", link.url)
            return UnfurlOutcome.IGNORED

        environment = resolve_environment(link.url, self.settings)
        meta = await fetch_creative_metadata(
            self.http_client, self.settings, environment, ids
        )
        if meta is None:
            return UnfurlOutcome.SKIPPED

        message = build_unfurl_message(
            link_url=link.url,
            title=self.settings.unfurl_title,
            meta=meta,
            ids=ids,
            editor_link=editor_url(environment, self.settings, meta.brand, ids),
            image_host=self.settings.image_optimizer_url,
        )

        if not self.settings.slack_bot_token:
            raise ConfigurationError("SLACK_BOT_TOKEN is not configured")

        delivered = await post_unfurl(
            self.slack_client,
            channel=event.event.channel,
            ts=event.event.message_ts,
            unfurls={link.url: message},
        )
        return UnfurlOutcome.DELIVERED if delivered else UnfurlOutcome.REJECTED


async def run_unfurl(service: UnfurlService, event: LinkSharedEvent) -> None:
    """Background entry point: run the unfurl and log, never raise.

    Slack only needs a fast acknowledgment, so failures end up in logs
    rather than in the webhook response.
    """
    try:
        outcome = await service.handle(event)
    except NoLinksPresentError as exc:
        logger.info("Nothing to unfurl: %s", exc)
        return
    except UnfurlError as exc:
        logger.error(
            "Unfurl failed for event %s: %s", event.event_id, exc, exc_info=True
        )
        return

    logger.info("Unfurl for event %s finished: %s", event.event_id, outcome.value)
