"""Slack ingress: event classification, signature verification, and chat.unfurl."""

from creative_unfurl.slack.client import build_slack_client, post_unfurl
from creative_unfurl.slack.events import classify_event

__all__ = [
    "build_slack_client",
    "classify_event",
    "post_unfurl",
]
