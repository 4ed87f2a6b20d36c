"""
Logging setup for HTTP Workbench.

All output goes through loguru. Records emitted by libraries that use the
standard ``logging`` module (uvicorn, SQLAlchemy, httpx) are forwarded to
loguru so there is a single sink.
"""

import logging
import sys
from types import FrameType
from typing import cast

from loguru import logger


class LoguruHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = cast(FrameType, frame.f_back)
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level,
            record.getMessage(),
        )


def setup_logging(level: str = "INFO") -> None:
    """
    Configure loguru as the only log sink.

    Args:
        level: Minimum level name, e.g. "DEBUG" or "INFO"
    """
    logger.remove()
    logger.add(sys.stderr, level=level)
    logging.basicConfig(handlers=[LoguruHandler()], level=0, force=True)
