"""
logging_config.py — Centralized Logging Configuration for the dispatch engine

Sets up Loguru as the single logging backend. Intercepts Python's stdlib
logging module so every logging.getLogger("dispatch.*") call routes
through Loguru with the same format.

Business Rules:
- All logs go through Loguru (no print() or bare stdlib handlers)
- JSON format in production for machine parsing
- Human-readable format in development
- LOG_LEVEL env var wins over settings.log_level

Called by: provider_dispatch/main.py (on startup)
Depends on: provider_dispatch/config.py (app_env, log_level)
"""

import logging
import os
import sys

from loguru import logger

from .config import get_settings


def setup_logging() -> None:
    """Configure Loguru and intercept stdlib logging.

    Call once at app startup.
    """
    logger.remove()

    settings = get_settings()
    log_level = os.getenv("LOG_LEVEL", settings.log_level).upper()
    is_production = settings.is_production

    if is_production:
        # Production: JSON lines to stdout (container runtime captures these)
        logger.add(
            sys.stdout,
            level=log_level,
            format="{message}",
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{message}"
            ),
            colorize=True,
        )

    # Route stdlib logging through Loguru
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=log_level, production=is_production)


class _InterceptHandler(logging.Handler):
    """Route stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames from stdlib logging internals so Loguru reports the caller
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )
