# =============================================================================
# app/logging_config.py - Logging Setup
# =============================================================================
# Configures the root logger once and tags every record with the id of the
# request being handled (set by the request-id middleware).
#
# Usage:
#   from app.logging_config import setup_logging
#   setup_logging(settings.log_level)
# =============================================================================

import contextvars
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

# "-" outside of a request (startup, shutdown)
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Safe to call more than once: basicConfig is a no-op when handlers
    already exist, and the filter is only attached once per handler.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
