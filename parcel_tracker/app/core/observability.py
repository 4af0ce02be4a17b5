"""
Logging setup for the Parcel Tracker.

Store operations log through named loggers with structured context
passed in ``extra``.
"""

import logging

from parcel_tracker.app.core.config import Settings, settings as default_settings

# Configure structured logger
logger = logging.getLogger("parcel_tracker")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``parcel_tracker.store``."""
    return logger.getChild(name)


def configure_logging(settings: Settings = default_settings) -> None:
    """Attach a stream handler and apply the configured level."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
