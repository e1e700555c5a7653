"""Log handlers for the ``pleasures`` package and the app script."""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

NAMESPACE = "pleasures"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# third-party loggers that chatter at DEBUG while exporting or previewing
NOISY = ("PIL", "OpenGL", "imageio")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route ``pleasures.*`` records to stderr and, if given, to ``log_file``.

    Calling it again replaces the previous handlers, so a second call
    from a test or a restarted window does not print every record twice.
    ``level`` may be a number or a level name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {level!r}")

    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug("Logging to stderr%s", f" and {log_file}" if log_file else "")
    return logger
