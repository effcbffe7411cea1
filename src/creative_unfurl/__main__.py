"""Run the service with uvicorn: ``python -m creative_unfurl``."""

import uvicorn

from creative_unfurl.config import get_settings


def main() -> None:
    # Fails fast with a ValidationError when the port is not a positive integer
    settings = get_settings()
    uvicorn.run(
        "creative_unfurl.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
