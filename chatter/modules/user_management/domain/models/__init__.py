from .user import USER_API_FIELDS, User, UserCreateData, UserUpdateData, project_user

__all__ = [
    "USER_API_FIELDS",
    "User",
    "UserCreateData",
    "UserUpdateData",
    "project_user",
]
