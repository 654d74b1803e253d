# core/logging_config.py
import logging

from core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "tenancy"

# supabase-py talks to PostgREST / Storage over httpx; its per-request
# INFO lines drown out lifecycle events
CHATTY_LIBRARIES = ("httpx", "httpcore", "hpack")


def resolve_level(name: str) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)

    # Avoid duplicate handlers in dev reload
    if logger.handlers:
        return logger

    logger.setLevel(resolve_level(settings.LOG_LEVEL))
    logger.propagate = settings.ENV == "test"

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    for name in CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


logger = setup_logger()
