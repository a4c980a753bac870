"""
Job application store.

Every operation is scoped to the owner resolved from the caller's token.
Lookups match on (id, owner) in a single query, so a record owned by someone
else is reported exactly like a missing one.
"""
import logging
from datetime import timedelta
from typing import Dict
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import NotFoundError
from jobtracker.db.base import utcnow
from jobtracker.db.models.job_application import ApplicationStatus, JobApplication
from jobtracker.schemas.job_application import JobApplicationRequest

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("title", "company", "status", "applied_date", "deadline", "notes")


def create_application(db: Session, data: JobApplicationRequest, owner_id: int) -> JobApplication:
    now = utcnow()
    application = JobApplication(
        **{name: getattr(data, name) for name in MUTABLE_FIELDS},
        user_id=owner_id,
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Failed to create application for user_id={owner_id}", exc_info=True)
        raise
    db.refresh(application)

    logger.info(f"Application created: id={application.id}, user_id={owner_id}, company={application.company}")
    return application


def get_application(db: Session, application_id: int, owner_id: int) -> JobApplication:
    """
    Fetch an application owned by ``owner_id``.

    Raises:
        NotFoundError: no application with that id belongs to the owner
    """
    application = db.query(JobApplication).filter(
        JobApplication.id == application_id,
        JobApplication.user_id == owner_id,
    ).first()

    if not application:
        raise NotFoundError(f"Job application not found with id: {application_id}")
    return application


def update_application(
    db: Session, application_id: int, data: JobApplicationRequest, owner_id: int
) -> JobApplication:
    """Replace every mutable field. Id and owner never change."""
    application = get_application(db, application_id, owner_id)

    for name in MUTABLE_FIELDS:
        setattr(application, name, getattr(data, name))

    # updated_at must move strictly forward even within one clock tick
    now = utcnow()
    if now <= application.updated_at:
        now = application.updated_at + timedelta(microseconds=1)
    application.updated_at = now

    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Failed to update application id={application_id}", exc_info=True)
        raise
    db.refresh(application)

    logger.info(f"Application updated: id={application.id}, user_id={owner_id}")
    return application


def delete_application(db: Session, application_id: int, owner_id: int) -> None:
    application = get_application(db, application_id, owner_id)
    try:
        db.delete(application)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Failed to delete application id={application_id}", exc_info=True)
        raise

    logger.info(f"Application deleted: id={application_id}, user_id={owner_id}")


def count_total(db: Session, owner_id: int) -> int:
    return db.query(func.count(JobApplication.id)).filter(JobApplication.user_id == owner_id).scalar() or 0


def count_by_status(db: Session, owner_id: int) -> Dict[ApplicationStatus, int]:
    """Application counts per status; statuses the owner never used count 0."""
    rows = (
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.user_id == owner_id)
        .group_by(JobApplication.status)
        .all()
    )
    counts = {status: 0 for status in ApplicationStatus}
    for status, count in rows:
        counts[ApplicationStatus(status)] = count
    return counts
