"""Creative metadata lookup against the studio's creative-metadata endpoint."""

import logging

import httpx
from pydantic import ValidationError

from creative_unfurl.config import Settings
from creative_unfurl.errors import MalformedUpstreamResponseError, UpstreamUnreachableError
from creative_unfurl.models.creative import CreativeIds, CreativeMetadata
from creative_unfurl.unfurl.environment import StudioEnvironment, metadata_url

logger = logging.getLogger(__name__)


async def fetch_creative_metadata(
    client: httpx.AsyncClient,
    settings: Settings,
    environment: StudioEnvironment,
    ids: CreativeIds,
) -> CreativeMetadata | None:
    """Fetch metadata for one creative.

    Returns None when the studio answers with a non-2xx status (soft failure,
    nothing to unfurl). Raises UpstreamUnreachableError on transport errors
    and MalformedUpstreamResponseError when the body is not a metadata object.
    """
    url = metadata_url(environment, settings)
    params = {"creativeset": ids.creativeset_id, "creative": ids.creative_id}

    try:
        response = await client.get(url, params=params)
    except httpx.HTTPError as exc:
        raise UpstreamUnreachableError("creative-metadata", str(exc)) from exc

    if not response.is_success:
        logger.warning(
            "Metadata request failed with status %d: %s",
            response.status_code,
            response.url,
        )
        return None

    try:
        payload = response.json()
    except ValueError as exc:
        raise MalformedUpstreamResponseError(
            f"Metadata response is not JSON: {exc}"
        ) from exc

    if not isinstance(payload, dict):
        raise MalformedUpstreamResponseError(
            f"Metadata response is a {type(payload).__name__}, expected an object"
        )

    try:
        metadata = CreativeMetadata.model_validate(payload)
    except ValidationError as exc:
        raise MalformedUpstreamResponseError(
            f"Metadata response has unexpected shape: {exc.error_count()} error(s)"
        ) from exc

    logger.info(
        "Fetched metadata for creativeset %d creative %d (%s)",
        ids.creativeset_id,
        ids.creative_id,
        environment.value,
    )
    return metadata
