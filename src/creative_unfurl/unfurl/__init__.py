"""Creative link unfurling.

Public API:
    UnfurlService(settings, http_client, slack_client).handle(event) -> UnfurlOutcome
        Parses the first shared link, fetches creative metadata and posts the
        preview via chat.unfurl.
    extract_creative_ids(url) -> CreativeIds | None
        Pure parser for ``/creatives/<creativeset>/<creative>`` links.
"""

from creative_unfurl.unfurl.blocks import build_unfurl_message, optimized_image_url
from creative_unfurl.unfurl.environment import StudioEnvironment, resolve_environment
from creative_unfurl.unfurl.service import UnfurlOutcome, UnfurlService, run_unfurl
from creative_unfurl.unfurl.urls import extract_creative_ids

__all__ = [
    "build_unfurl_message",
    "extract_creative_ids",
    "optimized_image_url",
    "resolve_environment",
    "run_unfurl",
    "StudioEnvironment",
    "UnfurlOutcome",
    "UnfurlService",
]
