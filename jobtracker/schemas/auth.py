"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import EmailStr, Field, field_validator

from jobtracker.db.models.user import Role
from jobtracker.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password (at most 72 bytes)")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username is required")
        if v != v.strip():
            raise ValueError("Username must not start or end with whitespace")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > 100:
            raise ValueError("Email must be at most 100 characters")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be 72 bytes or fewer")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "SecurePass123"
            }
        }


class LoginRequest(CamelModel):
    """Request schema for user login."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")

    class Config:
        json_schema_extra = {
            "example": {
                "username": "alice",
                "password": "SecurePass123"
            }
        }


class TokenResponse(CamelModel):
    """Bearer token plus the identity it was issued for."""
    token: str = Field(..., description="Signed bearer token")
    token_type: str = Field("Bearer", description="Authorization scheme")
    user_id: int
    username: str
    email: str
    role: Role
