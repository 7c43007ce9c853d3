"""
Logging Configuration
JSON logging for short-lived Lambda invocations.

Provides:
- CustomJsonFormatter: one JSON object per record, tagged with the invocation identity
- setup_logging: YAML dictConfig loader with environment substitution
- flush_log_handlers: flush buffered records before the execution context freezes
"""

import json
import logging
import logging.config
import os
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from .request_context import get_function_name, get_request_id

DEFAULT_LOGGING_CONFIG = Path(__file__).resolve().parent.parent / "logging.yml"

_STANDARD_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class CustomJsonFormatter(logging.Formatter):
    """
    JSON Formatter for CloudWatch Logs.

    Fields:
      - _time: ISO8601 timestamp (millisecond precision)
      - level: Log level
      - logger: Logger name (e.g. handler_factory.orchestrator)
      - message: Log message
      - aws_request_id: Request ID of the current invocation
      - function_name: Name of the invoked function
    """

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "aws_request_id", None) or get_request_id()
        function_name = getattr(record, "function_name", None) or get_function_name()

        log_data = {
            "_time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id:
            log_data["aws_request_id"] = request_id
        if function_name:
            log_data["function_name"] = function_name

        # Include extra fields
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_") and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config_path: Optional[str] = None, log_level: str = "INFO") -> None:
    """
    Load the YAML config, substitute environment variables, and initialize logging.
    """
    path = Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG
    if not path.exists():
        logging.basicConfig(level=log_level)
        return

    with open(path, "r", encoding="utf-8") as f:
        # Supports ${LOG_LEVEL} format.
        template = string.Template(f.read())

    mapping = os.environ.copy()
    mapping.setdefault("LOG_LEVEL", log_level)

    content = template.safe_substitute(mapping)
    config = yaml.safe_load(content)
    logging.config.dictConfig(config)


def flush_log_handlers(logger: Optional[logging.Logger] = None) -> None:
    """Flush every handler attached to the logger (root by default)."""
    target = logger or logging.getLogger()
    for handler in target.handlers:
        handler.flush()
