"""
Structured logging configuration for panos-bridge.

Provides text or JSON log output carrying contextual information about the
mapping build in progress.
"""

import functools
import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Literal

# Context variables for structured logging
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_var: ContextVar[str | None] = ContextVar("operation", default=None)
provider_var: ContextVar[str | None] = ContextVar("provider", default=None)

_CONTEXT_KEYS = ("request_id", "operation", "provider")

_RESERVED_RECORD_KEYS = {
    "name",
    "msg",
    "args",
    "created",
    "msecs",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "processName",
    "process",
    "threadName",
    "thread",
    "taskName",
    "message",
    "asctime",
    "relativeCreated",
    *_CONTEXT_KEYS,
}


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs structured log records.

    Supports both JSON and human-readable text formats.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        json_format: bool = False,
    ):
        """
        Initialise structured formatter.

        Args:
            fmt: Log format string (ignored if json_format=True).
            datefmt: Date format string.
            style: Format style ('%', '{', or '$').
            json_format: Whether to output JSON format.

        """
        super().__init__(fmt, datefmt, style)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON or text, with context attached."""
        record.request_id = request_id_var.get()
        record.operation = operation_var.get()
        record.provider = provider_var.get()

        if self.json_format:
            return self._format_json(record)
        return self._format_text(record)

    def _context(self, record: logging.LogRecord) -> dict[str, str]:
        return {
            key: value
            for key in _CONTEXT_KEYS
            if (value := getattr(record, key, None))
        }

    def _format_json(self, record: logging.LogRecord) -> str:
        """Format record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(self._context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def _format_text(self, record: logging.LogRecord) -> str:
        """Format record as human-readable text."""
        base_msg = super().format(record)
        context = self._context(record)
        if context:
            context_str = ", ".join(f"{key}={value}" for key, value in context.items())
            return f"{base_msg} [{context_str}]"
        return base_msg


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """
    Configure structured logging for panos-bridge.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Whether to output JSON format.
        log_file: Optional file path for log output.

    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter = StructuredFormatter(json_format=True)
    else:
        formatter = StructuredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    # Logs go to stderr so mapping output on stdout stays machine-readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("panos_bridge").setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.

    """
    return logging.getLogger(name)


def set_context(
    request_id: str | None = None,
    operation: str | None = None,
    provider: str | None = None,
) -> None:
    """Set context variables for structured logging."""
    if request_id is not None:
        request_id_var.set(request_id)
    if operation is not None:
        operation_var.set(operation)
    if provider is not None:
        provider_var.set(provider)


def clear_context() -> None:
    """Clear all context variables."""
    request_id_var.set(None)
    operation_var.set(None)
    provider_var.set(None)


class LogContext:
    """
    Context manager for temporary logging context.

    Example:
        with LogContext(operation="build_mapping", provider="panos"):
            logger.info("Building mapping")

    """

    def __init__(
        self,
        request_id: str | None = None,
        operation: str | None = None,
        provider: str | None = None,
    ):
        self.request_id = request_id
        self.operation = operation
        self.provider = provider
        self.previous_context: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        """Enter context and save previous values."""
        self.previous_context = {
            "request_id": request_id_var.get(),
            "operation": operation_var.get(),
            "provider": provider_var.get(),
        }
        set_context(
            request_id=self.request_id,
            operation=self.operation,
            provider=self.provider,
        )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context and restore previous values."""
        request_id_var.set(self.previous_context["request_id"])
        operation_var.set(self.previous_context["operation"])
        provider_var.set(self.previous_context["provider"])


def log_operation(operation_name: str):
    """
    Decorate functions to log operations with structured context.

    Args:
        operation_name: Name of the operation being logged.

    Example:
        @log_operation("build_mapping")
        def build_mapping(schema: SourceSchema) -> ProviderMapping:
            ...

    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)

            with LogContext(operation=operation_name):
                logger.debug(
                    f"Starting {operation_name}",
                    extra={"function": func.__name__},
                )
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Failed {operation_name}: {e}",
                        extra={"function": func.__name__},
                    )
                    raise
                logger.debug(
                    f"Completed {operation_name}",
                    extra={"function": func.__name__},
                )
                return result

        return wrapper

    return decorator
