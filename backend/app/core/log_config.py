# app/core/log_config.py
from __future__ import annotations

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the root logger. Safe to call more than once."""
    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    numeric = logging.getLevelName(resolved)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
    root.setLevel(numeric)
