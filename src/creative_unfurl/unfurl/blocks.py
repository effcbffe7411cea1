"""Pure functions building the Slack Block Kit message for a creative unfurl."""

from urllib.parse import quote

from creative_unfurl.models.creative import CreativeIds, CreativeMetadata

IMAGE_OPTIMIZE_PATH = "/io/api/image/optimize"
IMAGE_OPTIMIZE_QUERY = "w=200&h=200&q=85&f=webp&rt=contain"


def optimized_image_url(image_host: str, source_url: str) -> str:
    """Wrap a preload image URL in the image optimizer (200x200 webp thumbnail)."""
    encoded = quote(source_url, safe=":/")
    return f"{image_host.rstrip('/')}{IMAGE_OPTIMIZE_PATH}?u={encoded}&{IMAGE_OPTIMIZE_QUERY}"


def _format_number(value: int | float | None) -> str:
    if value is None:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _field(label: str, value: object) -> dict:
    return {"type": "mrkdwn", "text": f"*{label}:*\n{value}"}


def _fields_section(meta: CreativeMetadata, ids: CreativeIds) -> dict:
    fields = [
        {
            "type": "mrkdwn",
            "text": f"*Creativeset:* {meta.creativeset}\n{ids.creativeset_id}",
        },
        _field("Creative", ids.creative_id),
    ]
    if meta.size is not None:
        size = f"{_format_number(meta.size.width)} x {_format_number(meta.size.height)}"
        fields.append(_field("Size", size))
    fields.extend(
        [
            _field("Version", meta.version),
            _field("Brand", meta.brand),
            {
                "type": "mrkdwn",
                "text": (
                    f"*Elements:* {meta.element_count}\n"
                    f"*Duration:* {_format_number(meta.duration)}"
                ),
            },
        ]
    )
    return {"type": "section", "fields": fields}


def build_unfurl_message(
    *,
    link_url: str,
    title: str,
    meta: CreativeMetadata,
    ids: CreativeIds,
    editor_link: str,
    image_host: str,
) -> dict:
    """Build the unfurl attachment for one shared creative link.

    Layout: header, fields section, preview link with an "open in editor"
    button, and a thumbnail of the preload image when the studio provides one.
    """
    blocks: list[dict] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": title, "emoji": True},
        },
        _fields_section(meta, ids),
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"<{link_url}|View preview>"},
            "accessory": {
                "type": "button",
                "text": {"type": "plain_text", "text": "Open in Studio", "emoji": True},
                "url": editor_link,
                "action_id": "open-in-studio",
            },
        },
    ]

    # Slack rejects image blocks with an empty image_url
    if meta.preload_image:
        blocks.append(
            {
                "type": "image",
                "title": {
                    "type": "plain_text",
                    "text": f"{ids.creativeset_id} - {ids.creative_id}",
                    "emoji": True,
                },
                "image_url": optimized_image_url(image_host, meta.preload_image),
                "alt_text": "preload image",
            }
        )

    return {"blocks": blocks}
