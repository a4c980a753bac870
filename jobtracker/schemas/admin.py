"""
Pydantic schemas for admin endpoints.
"""
from datetime import datetime
from pydantic import Field

from jobtracker.db.models.user import Role, User
from jobtracker.schemas.common import CamelModel


class UserSummary(CamelModel):
    """Admin view of a user: profile fields and how many applications they track."""
    id: int
    username: str
    email: str
    role: Role
    created_at: datetime
    application_count: int = Field(..., description="Number of applications owned by the user")

    @classmethod
    def from_user(cls, user: User, application_count: int) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            application_count=application_count,
        )
