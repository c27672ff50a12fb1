import logging

from pgsearch.settings import LOG_LEVEL

logger = logging.getLogger("pgsearch")
logger.setLevel(LOG_LEVEL.upper())
logger.addHandler(logging.NullHandler())
