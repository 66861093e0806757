# 📄 File: chatter/modules/user_management/presentation/api/schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes exactly what the login and logout web endpoints accept and send back.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the REST auth endpoints. The user payload mirrors the
# API field allow-list (``_id`` and ``email``).
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# presentation/api/auth.py

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials posted to /auth/login."""

    email: str = Field(..., min_length=1, description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@chatter.io",
                "password": "Sup3r$ecret",
            }
        }
    )


class UserPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User identifier (24-character hex)")
    email: str


class LoginResponse(BaseModel):
    success: bool = True
    user: UserPayload


class LogoutResponse(BaseModel):
    success: bool = True
