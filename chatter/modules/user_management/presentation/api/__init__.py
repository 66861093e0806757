from .auth import auth_router

__all__ = ["auth_router"]
