"""Error taxonomy for the unfurl pipeline.

Links that are not creative links are not errors: the extractor returns None
and the pipeline ends quietly.
"""


class UnfurlError(Exception):
    """Base class for every failure the unfurl pipeline reports."""


class MalformedPayloadError(UnfurlError):
    """Inbound body does not match the event shape its headers and keys announce."""


class NoLinksPresentError(UnfurlError):
    """A link_shared event arrived with an empty ``links`` array."""


class UpstreamUnreachableError(UnfurlError):
    """Transport-level failure talking to the metadata service or Slack."""

    def __init__(self, target: str, detail: str) -> None:
        super().__init__(f"{target} unreachable: {detail}")
        self.target = target
        self.detail = detail


class MalformedUpstreamResponseError(UnfurlError):
    """Metadata service answered 2xx with a body we cannot use."""


class ConfigurationError(UnfurlError):
    """Required configuration (the bot token) is missing."""
