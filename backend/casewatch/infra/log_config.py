from __future__ import annotations

import os
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name} | <level>{message}</level>"


def configure_logging(level: Optional[str] = None, sink=None) -> int:
    level = (level or os.getenv("CASEWATCH_LOG_LEVEL", "INFO")).upper()
    logger.remove()
    return logger.add(sink or sys.stderr, level=level, format=LOG_FORMAT)
