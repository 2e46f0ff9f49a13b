import sys

from loguru import logger

from .config import Config


LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION


def configure(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default handler with the configured sinks."""
    logger.remove()

    # Log to console
    logger.add(sys.stderr, level=level)

    # Log to a file
    if LOG_PATH:
        logger.add(
            LOG_PATH,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            level=level,
        )


configure()
