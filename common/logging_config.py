"""
Logging Configuration.

All modules obtain their logger through `get_logger` so that output format
and verbosity stay consistent. The default level can be set with the
``EPROJ_LOG_LEVEL`` environment variable (e.g. ``DEBUG``).
"""

import logging
import os
import sys


LOG_LEVEL_ENV = "EPROJ_LOG_LEVEL"


def default_level() -> int:
    """Resolve the default logging level from the environment.

    Returns
    -------
    int
        The level named by ``EPROJ_LOG_LEVEL``, or ``logging.INFO`` when the
        variable is unset or names no known level.
    """
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


# Configure root logger for the package
def get_logger(name: str, level: int = None) -> logging.Logger:
    """Get a logger configured for the projection system.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int, optional
        Logging level. Defaults to `default_level()`.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(default_level() if level is None else level)
    return logger
