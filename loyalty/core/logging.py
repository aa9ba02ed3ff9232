"""Process-wide logging setup."""

from __future__ import annotations

import logging

from loyalty.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("loyalty").setLevel(level)
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["configure_logging", "LOG_FORMAT"]
