"""
Logging setup shared by the adapter loggers (``confide_mongo.*``).
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure root logging once and set the adapter log level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
    logger = logging.getLogger("confide_mongo")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
