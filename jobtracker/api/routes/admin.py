"""
Admin endpoints. Read-only views over users; application bodies are never exposed.
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtracker.core.auth_dependency import BearerGateRoute, require_admin
from jobtracker.db.session import get_db
from jobtracker.schemas.admin import UserSummary
from jobtracker.schemas.common import error_responses
from jobtracker.services import user_service

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    route_class=BearerGateRoute,
    responses=error_responses(401, 403, 404),
)


@router.get("/users", response_model=List[UserSummary])
def list_users(db: Session = Depends(get_db)):
    """All users with the number of applications each one tracks."""
    return [
        UserSummary.from_user(user, count)
        for user, count in user_service.list_users_with_counts(db)
    ]


@router.get("/users/{user_id}", response_model=UserSummary)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user, count = user_service.get_user_with_count(db, user_id)
    return UserSummary.from_user(user, count)
