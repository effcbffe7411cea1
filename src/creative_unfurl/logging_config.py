"""Structured JSON logging configuration.

Configures Python stdlib logging to emit JSON with GCP-compatible field names,
so hosted runtimes can pick up `severity`, `message`, and other fields from stdout.

Usage:
    from creative_unfurl.logging_config import configure_logging
    configure_logging("INFO")
"""

import copy
import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "creative-unfurl",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        # slack_sdk logs full request bodies at DEBUG
        "slack_sdk": {"level": "WARNING"},
        "httpx": {"level": "WARNING"},
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging configuration.

    Call once at application startup (the FastAPI lifespan does this).
    All subsequent ``logging.getLogger()`` calls emit JSON to stdout
    with a ``severity`` field mapped from Python's ``levelname``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["root"]["level"] = level.upper()
    logging.config.dictConfig(config)
