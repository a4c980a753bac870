"""
User model: credentials and role for the token-authenticated API.
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship
from jobtracker.db.base import Base, utcnow


class Role(str, enum.Enum):
    """Access roles."""
    USER = "USER"      # manages own job applications
    ADMIN = "ADMIN"    # can also list every user


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(Role, native_enum=False, length=20), default=Role.USER, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # No ORM cascade: user_service.delete_user removes applications explicitly first
    applications = relationship("JobApplication", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
