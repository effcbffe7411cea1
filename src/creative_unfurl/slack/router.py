"""Slack webhook routes on ``/``: acknowledgment, event intake, and the catch-all."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from creative_unfurl.errors import MalformedPayloadError
from creative_unfurl.models.slack import UrlVerificationEvent
from creative_unfurl.slack.events import classify_event
from creative_unfurl.slack.verification import read_slack_payload
from creative_unfurl.unfurl.service import UnfurlService, run_unfurl

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["slack"])


def get_unfurl_service(request: Request) -> UnfurlService:
    """Return the UnfurlService built in the application lifespan."""
    return request.app.state.unfurl_service


@router.get("/", response_class=PlainTextResponse)
async def acknowledge() -> str:
    """Static acknowledgment; no processing."""
    return "Creative unfurl service is running."


@router.post("/")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: object = Depends(read_slack_payload),
    service: UnfurlService = Depends(get_unfurl_service),
):
    """Receive Slack webhook events.

    URL verification echoes the challenge as plain text. link_shared events
    are acknowledged immediately and unfurled in the background; unfurl
    failures never change the response. Slack retries (X-Slack-Retry-Num)
    are acknowledged without unfurling again.
    """
    try:
        event = classify_event(request.headers, payload)
    except MalformedPayloadError as exc:
        logger.warning("Rejected malformed Slack payload: %s", exc)
        return PlainTextResponse("Bad Request", status_code=400)

    if event is None:
        logger.warning("Rejected unrecognized request")
        return PlainTextResponse("Bad Request", status_code=400)

    if isinstance(event, UrlVerificationEvent):
        logger.info("Answering URL verification challenge")
        return PlainTextResponse(event.challenge)

    if request.headers.get("X-Slack-Retry-Num"):
        return JSONResponse({"ok": True, "event_id": event.event_id})

    logger.info(
        "Received link_shared event %s with %d link(s) in channel %s",
        event.event_id,
        len(event.event.links),
        event.event.channel,
    )
    background_tasks.add_task(run_unfurl, service, event)
    return JSONResponse({"ok": True, "event_id": event.event_id})


@router.api_route("/", methods=["HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"])
async def unsupported_method() -> PlainTextResponse:
    return PlainTextResponse("Method Not Supported")
