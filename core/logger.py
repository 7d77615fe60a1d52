import logging
import sys
from loguru import logger

from config.settings import settings


class InterceptHandler(logging.Handler):
    """
    Default handler from examples in loguru documention.
    It intercepts standard logging messages and routes them to loguru.
    """
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(serialize: bool = True):
    # Remove standard loguru handlers (e.g., default console)
    logger.remove()

    # JSON to stdout for the process supervisor / log collector
    logger.add(
        sys.stdout,
        serialize=serialize,
        enqueue=True,
        level=settings.LOG_LEVEL,
    )

    # Human readable rolling log file
    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            rotation="10 MB",
            retention="10 days",
            level=settings.LOG_LEVEL,
            enqueue=True,
            serialize=False,
        )

    # Intercept existing standard loggers (uvicorn, fastapi, apscheduler, our modules)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "apscheduler"]:
        _logger = logging.getLogger(_log)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    logger.info("Structured logging (Loguru) initialized successfully.")
