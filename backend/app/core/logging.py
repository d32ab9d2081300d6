from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup, called once at app start."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # le SQL est piloté par DATABASE_ECHO, pas par LOG_LEVEL
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
