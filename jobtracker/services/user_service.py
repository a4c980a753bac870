"""
User service: registration, credential checks and admin lookups.

Every function takes the request's SQLAlchemy session and raises the errors
from jobtracker.core.exceptions; routes stay free of persistence details.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from jobtracker.core.security import hash_password, verify_password
from jobtracker.db.models.user import User, Role
from jobtracker.db.models.job_application import JobApplication

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username is already taken"
EMAIL_TAKEN = "Email is already registered"


def username_exists(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def email_exists(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User not found with id: {user_id}")
    return user


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a USER-role account.

    The existence checks give a precise message; the unique constraints still
    reject a concurrent registration that slips between check and insert.

    Raises:
        ConflictError: username or email already in use
    """
    if username_exists(db, username):
        raise ConflictError(USERNAME_TAKEN)
    if email_exists(db, email):
        raise ConflictError(EMAIL_TAKEN)

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=Role.USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration lost a uniqueness race: username={username}")
        # Work out which constraint fired for the message
        raise ConflictError(USERNAME_TAKEN if username_exists(db, username) else EMAIL_TAKEN)
    db.refresh(user)

    logger.info(f"User registered: user_id={user.id}, username={user.username}")
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: unknown username or wrong password (indistinguishable)
    """
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Login failed for username={username}")
        raise UnauthorizedError("Invalid username or password")
    logger.info(f"User logged in: user_id={user.id}")
    return user


def _application_count_query(db: Session):
    return (
        db.query(User, func.count(JobApplication.id))
        .outerjoin(JobApplication, JobApplication.user_id == User.id)
        .group_by(User.id)
    )


def list_users_with_counts(db: Session) -> List[Tuple[User, int]]:
    """Every user paired with the number of applications they own, oldest account first."""
    rows = _application_count_query(db).order_by(User.id).all()
    return [(user, count) for user, count in rows]


def get_user_with_count(db: Session, user_id: int) -> Tuple[User, int]:
    row = _application_count_query(db).filter(User.id == user_id).first()
    if not row:
        raise NotFoundError(f"User not found with id: {user_id}")
    user, count = row
    return user, count


def set_role(db: Session, username: str, role: Role) -> User:
    user = get_user_by_username(db, username)
    if not user:
        raise NotFoundError(f"User not found with username: {username}")
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info(f"User role changed: user_id={user.id}, role={role.value}")
    return user


def delete_user(db: Session, user_id: int) -> int:
    """
    Delete a user and every application they own, in one transaction.

    Applications are removed first, then the user row.

    Returns:
        Number of applications deleted

    Raises:
        NotFoundError: no such user
    """
    user = get_user(db, user_id)
    try:
        removed = (
            db.query(JobApplication)
            .filter(JobApplication.user_id == user.id)
            .delete(synchronize_session=False)
        )
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Failed to delete user_id={user_id}", exc_info=True)
        raise

    logger.info(f"User deleted: user_id={user_id}, applications_removed={removed}")
    return removed
