"""
Logging configuration for Staff Records Service
"""
import logging
import sys
from typing import Optional
from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries whose INFO output drowns out salary and storage events
_QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger for the service and its scripts

    Args:
        level: Level name overriding settings.LOG_LEVEL (the seed script's
            --log-level flag)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    # basicConfig is a no-op once handlers exist, the level still applies
    logging.getLogger().setLevel(log_level)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, env=%s, lock_timeout=%ss",
        level_name,
        settings.APP_ENV,
        settings.LOCK_TIMEOUT_SECONDS
    )
