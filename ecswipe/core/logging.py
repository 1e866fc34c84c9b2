"""Structured logging with JSON support and correlation IDs."""
import json
import logging
import uuid
import functools
import inspect
import time
from datetime import datetime, timezone
from typing import Optional

_RUN_ID: Optional[str] = None

EXTRA_FIELDS = ('region', 'resource_type', 'resource_id', 'action')


def get_run_id() -> str:
    """Get or create the current run ID."""
    global _RUN_ID
    if _RUN_ID is None:
        _RUN_ID = str(uuid.uuid4())[:8]
    return _RUN_ID


class JSONFormatter(logging.Formatter):
    """JSON log formatter with structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "run_id": get_run_id(),
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(verbosity: int = 1, json_format: bool = False) -> None:
    """Configure logging with optional JSON output.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2=DEBUG
        json_format: Use JSON formatter if True
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(run_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        # Only the text format needs run_id on every record
        handler.addFilter(_RunIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # botocore is chatty at DEBUG; keep it one notch quieter than us
    logging.getLogger('botocore').setLevel(max(level, logging.INFO))
    logging.getLogger('urllib3').setLevel(max(level, logging.INFO))


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()
        return True


def timed(func):
    """Decorator to log function execution time.

    When the wrapped function takes a ``region`` argument, the log line is
    tagged with it.
    """
    signature = inspect.signature(func)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        region = signature.bind_partial(*args, **kwargs).arguments.get('region')
        prefix = f"[{region}] " if region else ''
        start = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.time() - start
            logging.info(f"{prefix}{func.__name__} took {elapsed:.2f}s", extra={'region': region})
    return wrapper
