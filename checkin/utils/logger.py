# =======================================================================================
# checkin/utils/logger.py - Logging Setup
# =======================================================================================
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Install a single console handler on the package logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("checkin")
    # Clear existing handlers to avoid duplicates on app reload
    logger.handlers.clear()
    logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)
