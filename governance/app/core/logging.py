"""Structured logging configuration for the governance core.

Uses Python's standard logging module, configured through dictConfig, with
an optional JSON formatter for hosts that ship logs to an aggregator.
"""

import json
import logging
import logging.config
import sys
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

from governance.app.core.config import settings


# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "taskName",
    "message", "asctime", "timestamp", "logger", "level", "source",
))


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs log records as single-line JSON objects.

    Attributes:
        fields: List of fields to include in JSON output
    """

    STANDARD_FIELDS = ["name", "levelname", "message", "timestamp"]

    # Contextual fields describing a governance decision
    CONTEXT_FIELDS = [
        "operation",       # Logical operation, e.g. auth:signIn
        "config_name",     # Rate limit config applied
        "rate_limit_key",  # Bucket key the decision was made for
        "retry_after_ms",  # Retry hint attached to a denial
        "field",           # Schema field a validation message refers to
    ]

    def __init__(
        self,
        fields: Optional[list] = None,
        datefmt: Optional[str] = None,
    ):
        super().__init__(datefmt=datefmt)
        self.fields = fields or (self.STANDARD_FIELDS + self.CONTEXT_FIELDS)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of the log record
        """
        log_data: Dict[str, Any] = {}

        record.message = record.getMessage()

        log_data["timestamp"] = datetime.now().astimezone().isoformat()
        log_data["level"] = record.levelname
        log_data["logger"] = record.name
        log_data["message"] = record.message

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        for field in self.CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None and value != "-":
                log_data[field] = value

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in self.CONTEXT_FIELDS:
                continue
            log_data.setdefault("extra", {})[key] = value

        if record.exc_info and record.exc_info != (None, None, None):
            log_data["exception"] = traceback.format_exception(*record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class ContextFilter(logging.Filter):
    """Logging filter that adds default governance context to log records.

    Lets the structured text format reference context fields even when a
    record was emitted without them.
    """

    CONTEXT_DEFAULTS = {
        "operation": None,
        "config_name": None,
        "rate_limit_key": None,
        "retry_after_ms": None,
        "field": None,
    }

    def filter(self, record: logging.LogRecord) -> bool:
        for field, default in self.CONTEXT_DEFAULTS.items():
            if not hasattr(record, field):
                setattr(record, field, default)
        return True


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration dictionary.

    Returns:
        Logging configuration dict compatible with logging.config.dictConfig
    """
    log_format = getattr(settings, "log_format", "text").lower()
    log_level = getattr(settings, "log_level", "INFO").upper()

    formatters = {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        },
        "structured": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s - operation=%(operation)s - config_name=%(config_name)s - retry_after_ms=%(retry_after_ms)s"
        },
    }

    if log_format == "json":
        formatters["json"] = {
            "()": "governance.app.core.logging.JSONFormatter",
        }
        default_formatter = "json"
    else:
        default_formatter = "structured" if log_format == "structured" else "standard"

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": default_formatter,
            "stream": sys.stdout,
            "filters": ["context"],
        },
        "error_console": {
            "class": "logging.StreamHandler",
            "level": "ERROR",
            "formatter": default_formatter,
            "stream": sys.stderr,
            "filters": ["context"],
        },
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": {
            "context": {
                "()": "governance.app.core.logging.ContextFilter",
            },
        },
        "handlers": handlers,
        "loggers": {
            "governance": {
                "level": log_level,
                "handlers": ["console", "error_console"],
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
    }


def setup_logging() -> None:
    """Configure logging for the governance core.

    Hosts that already configure logging can skip this; every module logs
    through ``logging.getLogger(__name__)`` under the ``governance`` namespace.
    """
    logging.config.dictConfig(get_logging_config())


def get_logger(name: str = "governance") -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)


def get_log_context(
    operation: Optional[str] = None,
    config_name: Optional[str] = None,
    rate_limit_key: Optional[str] = None,
    retry_after_ms: Optional[int] = None,
    **extra
) -> Dict[str, Any]:
    """Create a log context dictionary for use with the extra parameter.

    Args:
        operation: Logical operation name
        config_name: Rate limit config applied
        rate_limit_key: Bucket key
        retry_after_ms: Retry hint in milliseconds
        **extra: Additional custom fields

    Returns:
        Dictionary suitable for passing as extra= parameter to logging calls

    Example:
        >>> logger.info(
        ...     "Rate limit denied",
        ...     extra=get_log_context(
        ...         operation="auth:signIn",
        ...         config_name="auth:signIn",
        ...         retry_after_ms=800,
        ...     )
        ... )
    """
    context = {
        "operation": operation,
        "config_name": config_name,
        "rate_limit_key": rate_limit_key,
        "retry_after_ms": retry_after_ms,
    }
    context.update(extra)
    return {k: v for k, v in context.items() if v is not None}
