import logging
import os


def get_tinybits_logger(name=None):
    """Return the package logger, or a child of it when ``name`` is given.

    The ``tinybits`` root gets a single stream handler the first time it is
    requested.  Its level comes from ``TINYBITS_LOG_LEVEL`` (default
    ``WARNING``) so step-by-step refine tracing stays quiet unless asked for.
    """
    logger = logging.getLogger("tinybits")
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter('[%(asctime)s][%(levelname)s][%(name)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    level_name = os.getenv("TINYBITS_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logger.setLevel(level)
    if name:
        return logger.getChild(name)
    return logger
