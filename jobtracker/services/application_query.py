"""
Query engine for job applications.

Builds the owner-scoped, filtered, sorted and paginated listing behind
GET /jobs. Filters are optional and combined with AND; an absent filter
places no constraint on the result.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from jobtracker.core.exceptions import BadRequestError
from jobtracker.db.models.job_application import ApplicationStatus, JobApplication

logger = logging.getLogger(__name__)

# API (camelCase) and column (snake_case) names accepted by sortBy
SORTABLE_COLUMNS = {
    "id": JobApplication.id,
    "title": JobApplication.title,
    "company": JobApplication.company,
    "status": JobApplication.status,
    "appliedDate": JobApplication.applied_date,
    "applied_date": JobApplication.applied_date,
    "deadline": JobApplication.deadline,
    "notes": JobApplication.notes,
    "createdAt": JobApplication.created_at,
    "created_at": JobApplication.created_at,
    "updatedAt": JobApplication.updated_at,
    "updated_at": JobApplication.updated_at,
}

SORT_DIRECTIONS = ("asc", "desc")

# Largest page index, page size or row offset accepted (32-bit signed int)
MAX_PAGE_VALUE = 2**31 - 1

_LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class ApplicationFilter:
    """Optional listing constraints."""
    status: Optional[ApplicationStatus] = None
    keyword: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class Page:
    """A slice of the filtered result set plus its position in the whole."""
    content: List[JobApplication] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total_elements: int = 0
    total_pages: int = 0
    last: bool = True


def _like_pattern(keyword: str) -> str:
    escaped = (
        keyword.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def apply_filters(query: Query, filters: ApplicationFilter) -> Query:
    """Narrow an application query by every filter that is set."""
    if filters.status is not None:
        query = query.filter(JobApplication.status == filters.status)

    if filters.keyword and filters.keyword.strip():
        pattern = _like_pattern(filters.keyword.strip())
        query = query.filter(
            or_(
                JobApplication.title.ilike(pattern, escape=_LIKE_ESCAPE),
                JobApplication.company.ilike(pattern, escape=_LIKE_ESCAPE),
            )
        )

    if filters.start_date is not None:
        query = query.filter(JobApplication.applied_date >= filters.start_date)

    if filters.end_date is not None:
        query = query.filter(JobApplication.applied_date <= filters.end_date)

    return query


def resolve_sort(sort_by: str, sort_dir: str) -> Tuple:
    """
    Translate sortBy/sortDir into ORDER BY clauses.

    Raises:
        BadRequestError: unknown field or direction
    """
    column = SORTABLE_COLUMNS.get(sort_by)
    if column is None:
        raise BadRequestError(f"Invalid sort field: {sort_by}")

    direction = (sort_dir or "").lower()
    if direction not in SORT_DIRECTIONS:
        raise BadRequestError(f"Invalid sort direction: {sort_dir} (expected 'asc' or 'desc')")

    primary = column.asc() if direction == "asc" else column.desc()
    if column is JobApplication.id:
        return (primary,)
    # id tiebreaker keeps page boundaries stable between requests
    tiebreak = JobApplication.id.asc() if direction == "asc" else JobApplication.id.desc()
    return (primary, tiebreak)


def list_applications(
    db: Session,
    owner_id: int,
    filters: ApplicationFilter,
    page: int = 0,
    size: int = 10,
    sort_by: str = "appliedDate",
    sort_dir: str = "desc",
) -> Page:
    """
    One page of the owner's applications matching ``filters``.

    Args:
        owner_id: Caller's user ID (from the authenticated identity)
        page: Zero-based page index
        size: Page size, at least 1; page * size stays within MAX_PAGE_VALUE
    """
    if page < 0:
        raise BadRequestError("Page index must not be negative")
    if size < 1:
        raise BadRequestError("Page size must be at least 1")
    if page > MAX_PAGE_VALUE or size > MAX_PAGE_VALUE or page * size > MAX_PAGE_VALUE:
        raise BadRequestError(f"Page window out of range: page * size must not exceed {MAX_PAGE_VALUE}")

    order_by = resolve_sort(sort_by, sort_dir)

    query = apply_filters(
        db.query(JobApplication).filter(JobApplication.user_id == owner_id),
        filters,
    )

    total = query.count()
    content = (
        query.options(joinedload(JobApplication.user))
        .order_by(*order_by)
        .offset(page * size)
        .limit(size)
        .all()
    )

    total_pages = math.ceil(total / size)
    logger.debug(f"Applications listed: user_id={owner_id}, total={total}, page={page}, size={size}")

    return Page(
        content=content,
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
        last=page + 1 >= total_pages,
    )
