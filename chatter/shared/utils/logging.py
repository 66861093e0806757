# 📄 File: chatter/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in Chatter in a structured way,
# so every line can be traced back to the request that caused it.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), request context tracking through
# contextvars, and a security audit logger for login, logout and session verification events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# chatter.main (startup configuration), chatter.api.middleware.logging (request context),
# chatter.modules.user_management (authentication audit trail)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "chatter-api"

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

# Global logging configuration
_logging_configured = False


class ContextualFormatter(logging.Formatter):
    """
    Text formatter that adds request ID, user ID and service information
    to every log record.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = request_id_var.get()
        record.user_id = user_id_var.get()
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent structure for
    log aggregation tools. Fields passed through ``extra={"extra_fields": {...}}``
    are nested under ``extra``.
    """

    def __init__(self):
        super().__init__("%(message)s")
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def add_fields(
        self,
        log_data: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)

        log_data["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_data["level"] = record.levelname
        log_data["logger"] = record.name
        log_data["module"] = record.module
        log_data["function"] = record.funcName
        log_data["line"] = record.lineno
        log_data["service"] = SERVICE_NAME
        log_data["hostname"] = self.hostname

        if request_id_var.get():
            log_data["request_id"] = request_id_var.get()
        if user_id_var.get():
            log_data["user_id"] = user_id_var.get()

        extra_fields = log_data.pop("extra_fields", None)
        if extra_fields:
            log_data["extra"] = extra_fields


class SecurityLogger:
    """
    Logger for security-related events and audit trails.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_authentication(
        self,
        user_id: Optional[str],
        event_type: str,
        success: bool,
        reason: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log authentication events (login, logout, session verification)."""
        extra_fields = {
            "event_type": "authentication",
            "auth_event": event_type,
            "user_id": user_id,
            "success": success,
            **(extra or {})
        }

        if reason:
            extra_fields["reason"] = reason

        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"Auth {event_type} for user {user_id or 'unknown'} - {'success' if success else 'failed'}",
            extra={"extra_fields": extra_fields}
        )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Replaces any handlers on the root logger with a single console handler
    using the JSON or contextual text formatter. Calling it again is a no-op.

    Args:
        log_level: Logging level name
        log_format: ``json`` or ``text``
        enable_console: Whether to attach the stdout handler

    Returns:
        logging.Logger: The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            "%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Driver chatter
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> Iterator[Dict[str, str]]:
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        user_id: User identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or "")

    try:
        yield {
            "request_id": request_id,
            "user_id": user_id or "",
        }
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
