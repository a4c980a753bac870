"""
JobApplication model: one tracked application, owned by exactly one user.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, Enum
from sqlalchemy.orm import relationship
from jobtracker.db.base import Base, utcnow


class ApplicationStatus(str, enum.Enum):
    """
    Lifecycle tags for an application.

    Listed in their usual order, but any status may be set at any time.
    """
    APPLIED = "APPLIED"
    SCREENING = "SCREENING"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    status = Column(
        Enum(ApplicationStatus, native_enum=False, length=50),
        default=ApplicationStatus.APPLIED,
        nullable=False,
    )
    applied_date = Column(Date, nullable=False)
    deadline = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Timestamps (set in Python so every backend keeps microseconds)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="applications")

    __table_args__ = (
        Index("idx_job_applications_user_id", "user_id"),
        Index("idx_job_applications_status", "status"),
        Index("idx_job_applications_applied_date", "applied_date"),
    )

    def __repr__(self):
        return f"<JobApplication(id={self.id}, company='{self.company}', title='{self.title}', status='{self.status}')>"
