'''
Application logger, configured once and imported everywhere as `log`.
'''
import logging
import sys

from .config import settings

LOG_FORMAT = '%(asctime)s - %(module)s - %(levelname)s\n - %(message)s'

def setup_logger(name: str = 'ST-backend', level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Returns the named application logger writing to stdout.
    Calling it again reuses the existing handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger

log = setup_logger()
