import logging
import sys
from typing import Optional

from calcparser import config

LOGGER_NAME = "calcparser"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Routes the lexer, symbol and evaluation loggers to stderr and ``log_file``.

    ``level`` defaults to ``CALCPARSER_LOG_LEVEL``. Calling it again replaces
    the handlers installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level_name = (level or config.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    logger.setLevel(numeric_level if isinstance(numeric_level, int) else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_logger(component: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{component}")
