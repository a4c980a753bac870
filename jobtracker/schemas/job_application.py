"""
Pydantic schemas for job application endpoints.
"""
from typing import Optional
from datetime import date, datetime
from pydantic import Field, field_validator

from jobtracker.db.models.job_application import ApplicationStatus, JobApplication
from jobtracker.schemas.common import CamelModel


class JobApplicationRequest(CamelModel):
    """Fields a client may set on create, and must resend in full on update."""
    title: str = Field(..., max_length=255, description="Job title")
    company: str = Field(..., max_length=255, description="Company name")
    status: ApplicationStatus = Field(..., description="Application status")
    applied_date: date = Field(..., description="Date applied (YYYY-MM-DD)")
    deadline: Optional[date] = Field(None, description="Optional deadline (YYYY-MM-DD)")
    notes: Optional[str] = Field(None, description="Free-text notes")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Job title is required")
        return v

    @field_validator("company")
    @classmethod
    def company_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Company name is required")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Backend Engineer",
                "company": "Acme Corp",
                "status": "APPLIED",
                "appliedDate": "2026-01-15",
                "deadline": "2026-02-01",
                "notes": "Referred by a former colleague."
            }
        }


class JobApplicationResponse(CamelModel):
    """Schema for job application response."""
    id: int
    title: str
    company: str
    status: ApplicationStatus
    applied_date: date
    deadline: Optional[date] = None
    notes: Optional[str] = None
    user_id: int = Field(..., description="Owner's user ID")
    username: str = Field(..., description="Owner's username")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, application: JobApplication) -> "JobApplicationResponse":
        return cls(
            id=application.id,
            title=application.title,
            company=application.company,
            status=application.status,
            applied_date=application.applied_date,
            deadline=application.deadline,
            notes=application.notes,
            user_id=application.user_id,
            username=application.user.username,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class JobApplicationPage(CamelModel):
    """One page of a filtered, sorted application listing."""
    content: list[JobApplicationResponse] = Field(..., description="Applications on this page")
    page: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Requested page size")
    total_elements: int = Field(..., description="Matching applications across all pages")
    total_pages: int = Field(..., description="Number of pages at this size")
    last: bool = Field(..., description="True when this is the final page")

    class Config:
        json_schema_extra = {
            "example": {
                "content": [],
                "page": 0,
                "size": 10,
                "totalElements": 0,
                "totalPages": 0,
                "last": True
            }
        }


class StatsResponse(CamelModel):
    """Per-status counts for the caller's applications."""
    total: int
    applied: int
    screening: int
    interview: int
    offer: int
    accepted: int
    rejected: int
    withdrawn: int
