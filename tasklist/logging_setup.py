"""
Logging configuration for the service and the CLI.

Two output formats are supported:
- text: one human-readable line per record
- json: one JSON object per line, with request context when available
"""
import json
import logging
import sys
from datetime import datetime, UTC

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# LogRecord extras copied into JSON output when present
_CONTEXT_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms", "error_type")


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """
    Configure the root logger.

    Call this once, early, before the first log line. Existing root handlers
    are replaced so repeated calls do not duplicate output.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        log_format: "text" or "json"
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    logging.captureWarnings(True)
