"""Logging configuration.

Every record carries the trace ID of the request that produced it, so the
lines of one editor save or careers page render can be grepped together.
"""

import logging
import sys
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from .config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(trace_id)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Trace ID of the request being handled; None outside a request
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)

_access_logger = logging.getLogger("careerstudio.access")


def new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


@contextmanager
def request_trace(trace_id: str | None = None) -> Iterator[str]:
    """Bind a trace ID to the current context for the duration of a request."""
    trace_id = trace_id or new_trace_id()
    token = trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        trace_id_var.reset(token)


class TraceIdFilter(logging.Filter):
    """Attach the current trace ID to every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = trace_id_var.get() or "-"
        return True


def log_request(method: str, path: str, status_code: int, started: float) -> None:
    """Write one access line; 5xx responses are logged as errors."""
    elapsed_ms = (time.perf_counter() - started) * 1000
    level = logging.ERROR if status_code >= 500 else logging.INFO
    _access_logger.log(level, f"{method} {path} -> {status_code} ({elapsed_ms:.1f} ms)")


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(TraceIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Library chatter: S3 client, upload parsing
    for name in ("urllib3", "botocore", "boto3", "multipart"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
