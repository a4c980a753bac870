"""
Authentication endpoints: registration, login and availability checks.

All routes here are public.
"""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtracker.core.logging_config import sanitize_log_data
from jobtracker.core.security import create_access_token
from jobtracker.db.models.user import User
from jobtracker.db.session import get_db
from jobtracker.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from jobtracker.schemas.common import AvailabilityResponse, error_responses
from jobtracker.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"], responses=error_responses(400, 401))


def token_response(user: User) -> TokenResponse:
    return TokenResponse(
        token=create_access_token(user.username),
        user_id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user and log them in.

    Returns 400 if the username or email is already taken.
    """
    logger.debug(f"Registration request: {sanitize_log_data(payload.model_dump())}")
    user = user_service.register_user(db, payload.username, payload.email, payload.password)
    return token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username and password for a bearer token."""
    user = user_service.authenticate_user(db, payload.username, payload.password)
    return token_response(user)


@router.get("/check-username", response_model=AvailabilityResponse)
def check_username(username: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    """Advisory only: registration re-checks under the unique constraint."""
    if user_service.username_exists(db, username):
        return AvailabilityResponse(available=False, message=user_service.USERNAME_TAKEN)
    return AvailabilityResponse(available=True, message="Username is available")


@router.get("/check-email", response_model=AvailabilityResponse)
def check_email(email: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    if user_service.email_exists(db, email):
        return AvailabilityResponse(available=False, message=user_service.EMAIL_TAKEN)
    return AvailabilityResponse(available=True, message="Email is available")
