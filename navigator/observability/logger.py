"""
Logger configuration.

Stdout logging with timestamps and the request correlation ID on every record.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from navigator.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("urllib3", "botocore", "boto3", "httpx", "google_genai")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Replaces existing root handlers, so calling it twice does not duplicate output.

    Args:
        level: Root log level name
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger (usually __name__)."""
    return logging.getLogger(name)
