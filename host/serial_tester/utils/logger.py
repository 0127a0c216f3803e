import logging
import sys

# Between DEBUG (10) and INFO (20)
INFO_VERBOSE = 15
logging.addLevelName(INFO_VERBOSE, 'INFO_VERBOSE')

ROOT_NAME = 'serial_tester'

_FORMAT = '[%(levelname)s] %(name)s: %(message)s'


def setup_logger(name: str, level: int = None) -> logging.Logger:
    """
    Get a package logger.

    Only the root 'serial_tester' logger gets a handler; child loggers
    propagate to it so one call to set_global_level() covers all of them.
    """
    logger = logging.getLogger(name)

    if name == ROOT_NAME and not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)

    return logger


def set_global_level(level: int):
    """Set the level on the package root logger."""
    logging.getLogger(ROOT_NAME).setLevel(level)
