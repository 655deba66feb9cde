import logging
import os
import sys
from typing import Optional, Sequence

LOGGER_NAMES = ("network", "shell", "main", "__main__")


def setup_logger(log_level: str = "WARNING",
                 log_file: Optional[str] = None,
                 names: Sequence[str] = LOGGER_NAMES) -> logging.Logger:
    """
    Configures the package loggers to log to stderr and (optionally) a file.
    Returns the first configured logger.

    stderr keeps log lines apart from query answers and listings on stdout.
    """
    level = getattr(logging, log_level.upper())

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers = []

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    handlers.append(ch)

    if log_file is not None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(level)
        fh.setFormatter(fmt)
        handlers.append(fh)

    loggers = []
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False  # avoid duplicate logs if root logger configured elsewhere

        # Clear any existing handlers (important on re-runs)
        for h in list(logger.handlers):
            logger.removeHandler(h)
        for h in handlers:
            logger.addHandler(h)
        loggers.append(logger)

    if log_file is not None:
        loggers[0].info(f"Logging to file: {log_file}")
    return loggers[0]
