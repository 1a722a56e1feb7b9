"""Process-wide logging setup."""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)
