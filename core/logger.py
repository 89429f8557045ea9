import logging
import sys

from core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False

def _configure():
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y/%m/%d %H:%M:%S"))

    root = logging.getLogger("swift_codes")
    root.setLevel(settings.LOG_LEVEL.upper())
    root.addHandler(handler)
    root.propagate = False
    _configured = True

def get_logger(name: str) -> logging.Logger:
    """Returns a logger under the application's 'swift_codes' namespace."""
    _configure()
    return logging.getLogger(f"swift_codes.{name}")
