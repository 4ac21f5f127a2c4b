import sys

from loguru import logger

from stockalerts.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = None) -> None:
    """Replace loguru's default sink with the service's stdout sink.

    Level comes from settings.LOG_LEVEL unless given explicitly.
    """
    logger.remove()
    logger.configure(extra={"name": "stockalerts"})
    logger.add(sys.stdout, level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)


def get_logger(name: str = None):
    """Return the shared loguru logger, bound to `name` when given."""
    if name:
        return logger.bind(name=name)
    return logger
