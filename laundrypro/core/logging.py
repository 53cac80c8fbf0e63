"""
Structured logging helpers for the client
"""
import json
import logging
from datetime import datetime, timezone

# Extra attributes copied from the log record when present
EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status",
    "user_id",
    "role",
    "phase",
    "store",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)
        if hasattr(record, "duration"):
            log_entry["duration_ms"] = record.duration

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def mask_phone(phone):
    """Hide the middle digits of a phone number for log output."""
    if not phone:
        return phone
    if len(phone) <= 6:
        return "*" * len(phone)
    return f"{phone[:4]}{'*' * (len(phone) - 7)}{phone[-3:]}"


def get_service_logger(service_name: str) -> logging.Logger:
    """Get a logger instance for a specific client component"""
    return logging.getLogger(f"laundrypro.{service_name}")
