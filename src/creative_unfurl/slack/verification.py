"""Optional Slack request signature verification as a FastAPI dependency."""

import json
import logging

from fastapi import HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from creative_unfurl.config import get_settings

logger = logging.getLogger(__name__)


async def read_slack_payload(request: Request) -> object:
    """Read the raw body, verify its signature if configured, and parse JSON.

    Reads the raw body FIRST so the signature is checked against the exact
    bytes Slack signed. Verification is skipped when no signing secret is
    configured.

    Raises HTTPException(403) on an invalid signature and
    HTTPException(400) when the body is not JSON.
    """
    settings = get_settings()
    body = await request.body()

    if settings.slack_signing_secret:
        verifier = SignatureVerifier(signing_secret=settings.slack_signing_secret)
        if not verifier.is_valid(
            body=body.decode("utf-8", errors="replace"),
            timestamp=request.headers.get("X-Slack-Request-Timestamp", ""),
            signature=request.headers.get("X-Slack-Signature", ""),
        ):
            raise HTTPException(status_code=403, detail="Invalid Slack signature")

    try:
        return json.loads(body)
    except ValueError:
        logger.warning("Rejected request with a non-JSON body")
        raise HTTPException(status_code=400, detail="Bad Request")
