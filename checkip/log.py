import logging
import sys

from checkip.config import LOG_LEVEL

LOG_FORMAT = "%(message)s"


class LevelFormatter(logging.Formatter):
    """Prefix each line with the level name as ``Info``, ``Warning``, ..."""

    def format(self, record: logging.LogRecord) -> str:
        return f"{record.levelname.title()} - {super().format(record)}"


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    # every significant step goes to stdout as "{Level} - {message}"
    logger = logging.getLogger("checkip")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(LevelFormatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
