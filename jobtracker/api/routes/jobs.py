"""
Job application endpoints.

Every route requires a bearer token and works only on the caller's own
applications. Another user's application answers 404, same as a missing one.
"""
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtracker.core.auth_dependency import BearerGateRoute, Identity, get_current_identity
from jobtracker.db.models.job_application import ApplicationStatus
from jobtracker.db.session import get_db
from jobtracker.schemas.common import MessageResponse, error_responses
from jobtracker.schemas.job_application import (
    JobApplicationRequest,
    JobApplicationResponse,
    JobApplicationPage,
    StatsResponse,
)
from jobtracker.services import application_service
from jobtracker.services.application_query import MAX_PAGE_VALUE, ApplicationFilter, list_applications
from jobtracker.services.stats_service import get_statistics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    dependencies=[Depends(get_current_identity)],
    route_class=BearerGateRoute,
    responses=error_responses(400, 401, 404),
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobApplicationResponse)
def create_job(
    job_data: JobApplicationRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Create a job application owned by the authenticated user."""
    application = application_service.create_application(db, job_data, identity.user_id)
    return JobApplicationResponse.from_model(application)


@router.get("", response_model=JobApplicationPage)
def list_jobs(
    page: int = Query(0, ge=0, le=MAX_PAGE_VALUE, description="Zero-based page index"),
    size: int = Query(10, ge=1, le=MAX_PAGE_VALUE, description="Items per page"),
    sort_by: str = Query("appliedDate", alias="sortBy", description="Field to sort by"),
    sort_dir: str = Query("desc", alias="sortDir", description="asc or desc"),
    status: Optional[ApplicationStatus] = Query(None, description="Filter by status"),
    keyword: Optional[str] = Query(None, description="Case-insensitive match on title or company"),
    start_date: Optional[date] = Query(None, alias="startDate", description="Applied on or after"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Applied on or before"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    List the caller's applications.

    Filters combine with AND. Supports sorting on any application field.
    """
    filters = ApplicationFilter(
        status=status,
        keyword=keyword,
        start_date=start_date,
        end_date=end_date,
    )
    result = list_applications(
        db,
        identity.user_id,
        filters,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    return JobApplicationPage(
        content=[JobApplicationResponse.from_model(app) for app in result.content],
        page=result.page,
        size=result.size,
        total_elements=result.total_elements,
        total_pages=result.total_pages,
        last=result.last,
    )


# Declared before /{job_id} so "stats" is not parsed as an id
@router.get("/stats", response_model=StatsResponse)
def job_stats(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Counts of the caller's applications, in total and per status."""
    return StatsResponse(**get_statistics(db, identity.user_id))


@router.get("/{job_id}", response_model=JobApplicationResponse)
def get_job(
    job_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    application = application_service.get_application(db, job_id, identity.user_id)
    return JobApplicationResponse.from_model(application)


@router.put("/{job_id}", response_model=JobApplicationResponse)
def update_job(
    job_id: int,
    job_data: JobApplicationRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Replace all editable fields of an application."""
    application = application_service.update_application(db, job_id, job_data, identity.user_id)
    return JobApplicationResponse.from_model(application)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    application_service.delete_application(db, job_id, identity.user_id)
    return MessageResponse(success=True, message="Job application deleted successfully")
