"""
Logging setup for processes that embed the LightBnB data access layer.
Modules log through logging.getLogger(__name__); this only configures the root logger.
"""

from typing import Optional
from lightbnb.config import Settings, get_settings
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure the root logger once, at the configured level."""
    global _configured
    if _configured:
        return

    settings = settings or get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(settings.log_level)
    root.addHandler(handler)

    # SQLAlchemy's own statement echo follows sql_echo, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.sql_echo else logging.WARNING
    )
    _configured = True
