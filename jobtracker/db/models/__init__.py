"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from jobtracker.db.models.user import User, Role
from jobtracker.db.models.job_application import JobApplication, ApplicationStatus

# Explicitly export all models for clarity
__all__ = [
    "User",
    "Role",
    "JobApplication",
    "ApplicationStatus",
]
