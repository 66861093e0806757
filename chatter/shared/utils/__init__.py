from .logging import (
    ContextualFormatter,
    JSONFormatter,
    SecurityLogger,
    log_context,
    request_id_var,
    setup_logging,
    user_id_var,
)

__all__ = [
    "ContextualFormatter",
    "JSONFormatter",
    "SecurityLogger",
    "log_context",
    "request_id_var",
    "setup_logging",
    "user_id_var",
]
