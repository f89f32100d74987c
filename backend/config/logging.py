import logging
import os
import sys

LOGGER_NAME = "boq_service"


def get_logger():
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers = []

    LOG_FILE = os.environ.get("LOG_FILE")

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s"
    )
    if LOG_FILE:
        LOG_FILE = os.path.normpath(LOG_FILE)
        log_dir = os.path.dirname(LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def configure_quiet_logging():
    """
    Suppress verbose logging from third-party libraries.
    Call this early in app startup to reduce log noise.
    """
    # Only show werkzeug errors
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    # SQLAlchemy engine logs (warnings and up)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)


logger = get_logger()
