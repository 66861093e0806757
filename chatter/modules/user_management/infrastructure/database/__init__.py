from .user_repository import USERS_COLLECTION, build_user_repository

__all__ = ["USERS_COLLECTION", "build_user_repository"]
