"""Slack Events API payloads consumed by the unfurl service."""

from pydantic import BaseModel, ConfigDict


class SharedLink(BaseModel):
    """One entry of ``event.links`` in a link_shared event."""

    model_config = ConfigDict(frozen=True)

    domain: str
    url: str


class InnerEvent(BaseModel):
    """The ``event`` object of a link_shared callback."""

    model_config = ConfigDict(frozen=True)

    type: str = "link_shared"
    channel: str
    is_bot_user_member: bool = False
    user: str | None = None
    message_ts: str  # Slack message ts, e.g., "1234567890.123456"
    unfurl_id: str = ""
    thread_ts: str | None = None
    source: str = ""
    links: list[SharedLink]  # Ordered; only the first link is unfurled


class LinkSharedEvent(BaseModel):
    """Envelope of an ``event_callback`` carrying a link_shared event."""

    model_config = ConfigDict(frozen=True)

    token: str = ""
    team_id: str | None = None
    api_app_id: str = ""
    type: str = "event_callback"
    authed_users: list[str] | None = None
    event_id: str = ""
    event_time: int = 0
    event: InnerEvent


class UrlVerificationEvent(BaseModel):
    """One-time handshake Slack sends to confirm ownership of the endpoint."""

    model_config = ConfigDict(frozen=True, strict=True)

    token: str
    challenge: str
    type: str
