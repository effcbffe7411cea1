"""Studio environment (production vs sandbox) resolved from a shared link."""

from enum import Enum
from urllib.parse import quote, urlsplit

from creative_unfurl.config import Settings
from creative_unfurl.models.creative import CreativeIds


class StudioEnvironment(str, Enum):
    """Which studio instance a shared link points at."""

    PRODUCTION = "production"
    SANDBOX = "sandbox"


def resolve_environment(link_url: str, settings: Settings) -> StudioEnvironment:
    """Pick the studio environment from the host of a shared link.

    A link is sandbox when the configured sandbox studio host appears in its
    host; everything else is production.
    """
    sandbox_host = urlsplit(settings.sandbox_studio_url).netloc.lower()
    link_host = urlsplit(link_url).netloc.lower()
    if sandbox_host and sandbox_host in link_host:
        return StudioEnvironment.SANDBOX
    return StudioEnvironment.PRODUCTION


def studio_base_url(environment: StudioEnvironment, settings: Settings) -> str:
    """Return the studio base URL (no trailing slash) for an environment."""
    if environment == StudioEnvironment.SANDBOX:
        return settings.sandbox_studio_url.rstrip("/")
    return settings.studio_url.rstrip("/")


def metadata_url(environment: StudioEnvironment, settings: Settings) -> str:
    """Return the creative-metadata endpoint. Ids travel as query params."""
    return f"{studio_base_url(environment, settings)}/creatives/creative-metadata"


def editor_url(
    environment: StudioEnvironment, settings: Settings, brand: str, ids: CreativeIds
) -> str:
    """Return the 'open in editor' link for a creativeset."""
    base = studio_base_url(environment, settings)
    brand_segment = quote(brand, safe="")
    return f"{base}/brand/{brand_segment}/creativeset/{ids.creativeset_id}"
