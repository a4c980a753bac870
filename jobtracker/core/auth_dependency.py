"""
Authorization gate.

Protected routers use BearerGateRoute, which turns away requests without a
valid bearer token before the body is read, and depend on
get_current_identity, which resolves the caller and hands the handler an
explicit Identity. The admin router additionally depends on require_admin.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import ForbiddenError, UnauthorizedError
from jobtracker.core.security import decode_access_token
from jobtracker.db.models.user import Role
from jobtracker.db.session import get_db
from jobtracker.services.user_service import get_user_by_username

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 in our error format
bearer_scheme = HTTPBearer(auto_error=False, description="Token from /auth/login or /auth/register")


def bearer_token(authorization: Optional[str]) -> str:
    """Token part of an ``Authorization: Bearer <token>`` header."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Authentication token is missing")
    return token.strip()


class BearerGateRoute(APIRoute):
    """
    Route class for protected routers.

    Checks the token's presence, signature and expiry ahead of body parsing,
    so an unauthenticated request gets 401 even when its body is malformed.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            decode_access_token(bearer_token(request.headers.get("Authorization")))
            return await handler(request)

        return gated_handler


@dataclass(frozen=True)
class Identity:
    """Who is calling. Resolved once per request and passed down explicitly."""
    user_id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve the caller from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication token is missing")

    username = decode_access_token(credentials.credentials)

    # Role is read from the store so a promotion or deletion applies immediately
    user = get_user_by_username(db, username)
    if not user:
        logger.warning(f"Authentication failed: token subject {username} no longer exists")
        raise UnauthorizedError("Invalid token")

    return Identity(user_id=user.id, username=user.username, role=user.role)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Allow only ADMIN identities through."""
    if not identity.is_admin:
        logger.warning(f"Admin access denied: user_id={identity.user_id}")
        raise ForbiddenError("Access denied: administrator role required")
    return identity
