from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.settings import LOG_PATH, LOGGING


def ensure_logger(name: str, path: Path | str = LOG_PATH, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=LOGGING.max_bytes, backupCount=LOGGING.backup_count, encoding="utf-8"
        )
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    resolved = logging.getLevelName((level or LOGGING.level).upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    return logger


__all__ = ["ensure_logger"]
