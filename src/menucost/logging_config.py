"""Structured logging configuration for the menucost application."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from menucost.config import get_settings

# Context variables for request/dish tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
dish_ctx: ContextVar[str | None] = ContextVar("dish", default=None)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": _utcnow().isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add context from context variables
        if request_id := request_id_ctx.get():
            log_data["request_id"] = request_id
        if dish := dish_ctx.get():
            log_data["dish"] = dish

        # Add extra fields from the record
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add location info
        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        # Build context string
        context_parts = []
        if request_id := request_id_ctx.get():
            context_parts.append(f"req={request_id[:8]}")
        if dish := dish_ctx.get():
            context_parts.append(f"dish={dish}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        # Format the message
        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        formatted = f"{timestamp} | {level} | {record.name}{context_str} | {message}"

        # Add exception if present
        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes context variables."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})

        # Add context variables to extra
        if request_id := request_id_ctx.get():
            extra["request_id"] = request_id
        if dish := dish_ctx.get():
            extra["dish"] = dish

        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    logger = logging.getLogger(name)
    return ContextLogger(logger, {})


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for the application.

    Arguments left as None are taken from Settings (MENUCOST_LOG_LEVEL,
    MENUCOST_LOG_FORMAT, MENUCOST_LOG_FILE).

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format for logs. If None, follow the log_format
            setting; "auto" means JSON in production when stdout is not a tty.
        log_file: Optional file path to write logs to.
    """
    settings = get_settings()

    # Settings decide the format unless the caller does
    if json_format is None:
        log_format = settings.log_format.lower()
        json_format = log_format == "json" or (
            log_format == "auto"
            and not sys.stdout.isatty()
            and settings.environment.lower() == "production"
        )

    # Log level and file from the parameters or Settings
    level_str = (log_level or settings.log_level).upper()
    log_file = log_file or settings.log_file
    level = getattr(logging, level_str, logging.INFO)

    # Create formatter based on format preference
    if json_format:
        formatter: logging.Formatter = StructuredJsonFormatter()
    else:
        formatter = ContextualFormatter()

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    # Optional file handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # Configure log levels for specific modules
    module_levels = {
        "menucost": level,
        "menucost.costing": level,
        "menucost.voice": level,
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.WARNING,
    }

    for module_name, module_level in module_levels.items():
        logging.getLogger(module_name).setLevel(module_level)

    # Log initial configuration
    logger = get_logger(__name__)
    logger.info(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}"
    )


def set_context(request_id: str | None = None, dish: str | None = None) -> None:
    """Set logging context variables."""
    if request_id is not None:
        request_id_ctx.set(request_id)
    if dish is not None:
        dish_ctx.set(dish)


def clear_context() -> None:
    """Clear all logging context variables."""
    request_id_ctx.set(None)
    dish_ctx.set(None)


class LoggingContext:
    """Context manager for setting logging context."""

    def __init__(self, request_id: str | None = None, dish: str | None = None):
        self.request_id = request_id
        self.dish = dish
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        if self.request_id is not None:
            self._tokens["request_id"] = request_id_ctx.set(self.request_id)
        if self.dish is not None:
            self._tokens["dish"] = dish_ctx.set(self.dish)
        return self

    def __exit__(self, *args: Any) -> None:
        ctx_vars = {"request_id": request_id_ctx, "dish": dish_ctx}
        for name, token in self._tokens.items():
            ctx_vars[name].reset(token)
