"""Data models for Slack payloads and creative metadata."""

from creative_unfurl.models.creative import CreativeIds, CreativeMetadata, CreativeSize
from creative_unfurl.models.slack import (
    InnerEvent,
    LinkSharedEvent,
    SharedLink,
    UrlVerificationEvent,
)

__all__ = [
    "CreativeIds",
    "CreativeMetadata",
    "CreativeSize",
    "InnerEvent",
    "LinkSharedEvent",
    "SharedLink",
    "UrlVerificationEvent",
]
