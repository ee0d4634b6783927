"""Environment-driven settings: data directory and log level."""
import logging
import os

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DATA_DIR = os.environ.get("WORKSHOP_DATA_DIR", os.path.join(ROOT_DIR, "data"))
EXPORT_DIR = os.environ.get("WORKSHOP_EXPORT_DIR", os.path.join(ROOT_DIR, "figures"))
LOG_LEVEL = os.environ.get("WORKSHOP_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Send ``workshop.*`` log records to stderr. Repeat calls are no-ops."""
    logger = logging.getLogger("workshop")
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
    return logger
