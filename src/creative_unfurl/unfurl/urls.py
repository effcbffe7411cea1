"""Creative id extraction from shared studio links."""

import re
from urllib.parse import urlsplit

from creative_unfurl.models.creative import CreativeIds

CREATIVES_PREFIX = "/creatives"

# Decimal digits with an optional leading "+": no minus, whitespace, underscores
# or unicode digits
_DECIMAL_PATTERN = re.compile(r"\+?[0-9]+")

_U64_MAX = 2**64 - 1


def _parse_u64(segment: str) -> int | None:
    if not _DECIMAL_PATTERN.fullmatch(segment):
        return None
    value = int(segment)
    return value if value <= _U64_MAX else None


def extract_creative_ids(url: str) -> CreativeIds | None:
    """Extract creativeset and creative ids from a studio link.

    Matches absolute URLs whose path looks like
    ``/creatives/<creativeset>/<creative>[/...]``; trailing segments,
    query strings and fragments are ignored. Returns None for anything else.
    """
    try:
        parts = urlsplit(url)
        parts.port  # Raises ValueError for a non-numeric or out-of-range port
    except ValueError:
        return None

    if not parts.scheme or not parts.hostname:
        return None
    if any(char.isspace() for char in parts.netloc):
        return None
    if not parts.path.startswith(CREATIVES_PREFIX):
        return None

    # "/creatives/12/6666/preview" -> ["creatives", "12", "6666", "preview"]
    segments = parts.path[1:].split("/")
    if len(segments) < 3 or segments[0] != "creatives":
        return None

    creativeset_id = _parse_u64(segments[1])
    creative_id = _parse_u64(segments[2])
    if creativeset_id is None or creative_id is None:
        return None

    return CreativeIds(creativeset_id=creativeset_id, creative_id=creative_id)
