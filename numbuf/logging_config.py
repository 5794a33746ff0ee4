"""Console and file logging for the ``numbuf`` entry points.

Library modules only create child loggers of ``numbuf``; nothing is printed
until the CLI or the server calls :func:`setup_logging`.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """Route ``numbuf`` records to stdout and, if given, to *log_file*.

    *level* is a ``logging`` constant or its name in any case.  Calling this
    again replaces the handlers installed by the previous call.
    """
    level = _resolve_level(level)
    logger = logging.getLogger("numbuf")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at %s", logging.getLevelName(level))
