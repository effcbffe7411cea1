"""Classification of inbound Slack webhook payloads."""

from collections.abc import Mapping

from pydantic import ValidationError

from creative_unfurl.errors import MalformedPayloadError
from creative_unfurl.models.slack import LinkSharedEvent, UrlVerificationEvent

TIMESTAMP_HEADER = "x-slack-request-timestamp"

SlackEvent = UrlVerificationEvent | LinkSharedEvent


def has_timestamp_header(headers: Mapping[str, str]) -> bool:
    """Check for the Slack timestamp header, ignoring case."""
    return any(name.lower() == TIMESTAMP_HEADER for name in headers.keys())


def classify_event(headers: Mapping[str, str], body: object) -> SlackEvent | None:
    """Classify a webhook payload as URL verification, link_shared, or neither.

    Only payloads carrying the ``X-Slack-Request-Timestamp`` header are treated
    as Slack events; header presence is checked, not authenticity. A body with
    a ``challenge`` key is a URL verification, otherwise a body with an
    ``event`` key is a link_shared callback. Anything else returns None.

    Raises MalformedPayloadError when the payload matches a branch but fails
    to deserialize into that branch's shape.
    """
    if not isinstance(body, dict) or not has_timestamp_header(headers):
        return None

    if "challenge" in body:
        model: type[UrlVerificationEvent] | type[LinkSharedEvent] = UrlVerificationEvent
    elif "event" in body:
        model = LinkSharedEvent
    else:
        return None

    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise MalformedPayloadError(
            f"Invalid {model.__name__} payload: {exc.error_count()} error(s)"
        ) from exc
