"""Async Slack Web API client and the chat.unfurl call.

The client is built once from settings in the application lifespan and handed
to the unfurl service, so tests can substitute a fake without touching globals.
"""

import logging

import aiohttp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from creative_unfurl.config import Settings
from creative_unfurl.errors import UpstreamUnreachableError

logger = logging.getLogger(__name__)


def build_slack_client(settings: Settings) -> AsyncWebClient:
    """Create an AsyncWebClient authenticated with the bot token."""
    return AsyncWebClient(
        token=settings.slack_bot_token or None,
        base_url=settings.slack_api_url,
        timeout=settings.http_timeout_seconds,
        # No retries: the default handler resends chat.unfurl on connection errors
        retry_handlers=[],
    )


async def post_unfurl(
    client: AsyncWebClient, channel: str, ts: str, unfurls: dict[str, dict]
) -> bool:
    """Send unfurls for a message via chat.unfurl.

    Best effort: a Slack-side rejection (non-2xx or ``ok: false``) is logged
    and reported as False. Transport failures raise UpstreamUnreachableError.

    Args:
        client: Slack Web API client carrying the bot token.
        channel: Channel ID of the message with the shared link.
        ts: Timestamp of that message.
        unfurls: Map of shared URL to its attachment (``{"blocks": [...]}``).
    """
    try:
        await client.chat_unfurl(channel=channel, ts=ts, unfurls=unfurls)
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        logger.warning(
            "Unfurl unsuccessful for message %s in %s: %s", ts, channel, error_code
        )
        return False
    except (aiohttp.ClientError, TimeoutError) as exc:
        raise UpstreamUnreachableError("slack", str(exc) or type(exc).__name__) from exc

    logger.info("Unfurl successful for message %s in %s", ts, channel)
    return True
