"""
Logging configuration.

Everything goes through loguru; uvicorn's standard-library loggers are
routed into it so access and error lines share one format.
"""

import logging
import sys

from loguru import logger

from app.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}"
)


class InterceptHandler(logging.Handler):
    """Forward standard-library records to loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging():
    """Setup logging configuration"""
    logger.remove()

    if settings.ENVIRONMENT == "production":
        # One JSON object per line for the log shipper
        logger.add(sys.stdout, level=settings.LOG_LEVEL.upper(), serialize=True)
    else:
        logger.add(sys.stderr, level=settings.LOG_LEVEL.upper(), format=CONSOLE_FORMAT, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False


# Create logger instance
log = logger
