"""Application factory — a FastAPI app wired for request validation.

Configures structured logging and registers the problem exception handler.
Routes that validate their body take a RequestManager dependency.
"""

import logging
from typing import Optional

import structlog
from fastapi import FastAPI

from request_manager.api.handlers import register_exception_handlers
from request_manager.config import Settings, get_settings

logger = structlog.get_logger()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog for console output in debug, JSON otherwise."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Optional settings override. Defaults to environment settings.

    Returns:
        FastAPI app with logging configured and problem handlers registered
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Request Manager",
        description="Request body validation for FastAPI controllers.",
        version="1.0.0",
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    register_exception_handlers(app)

    logger.info("app_created", debug=settings.DEBUG)
    return app
