"""
Logging setup
"""

import logging

from moneymigo.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = None):
    """Configure root logging once, from LOG_LEVEL unless a level is given"""
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("moneymigo").setLevel(level)
