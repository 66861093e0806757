"""
Application-level API: health endpoints and HTTP middleware.
"""

from .health import health_router

__all__ = ["health_router"]
