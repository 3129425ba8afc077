"""structlog setup shared by the CLI and the API server."""

import logging

import structlog

from healthlog.config.settings import settings


def configure_logging(level: str | None = None, environment: str | None = None) -> None:
    """Configure structlog to drop events below ``level``.

    Development renders events for the console; production emits one JSON
    object per event.

    Args:
        level: Level name (defaults to ``settings.log_level``).
        environment: ``development`` or ``production`` (defaults to
            ``settings.environment``).
    """
    level_name = (level or settings.log_level).upper()
    environment = environment or settings.environment
    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        cache_logger_on_first_use=False,
    )
