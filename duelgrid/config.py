from __future__ import annotations

import logging
import os

GRID_SIZE = int(os.getenv("GRID_SIZE", "8"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
REDIS_URL = os.getenv("REDIS_URL")
LOG_MAX_ENTRIES = int(os.getenv("LOG_MAX_ENTRIES", "1000"))
LOG_TTL_SECONDS = int(os.getenv("LOG_TTL_SECONDS", "0")) or None


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
