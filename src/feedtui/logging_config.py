import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Route loguru output away from the terminal the UI draws on.

    With a log file, records go to a rotating file sink. Without one, only
    warnings and worse reach stderr.
    """
    logger.remove()
    if log_file:
        logger.add(log_file, level=level, format=LOG_FORMAT, rotation="5 MB", retention=3, enqueue=True)
    else:
        logger.add(sys.stderr, level="WARNING", format=LOG_FORMAT)
