import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from jobtracker.core import config
from jobtracker.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

# Passlib context only verifies hashes written by older passlib-based deployments;
# new hashes always go through bcrypt directly.
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _password_bytes(password: str) -> bytes:
    """Encode a password for bcrypt, clamped to its 72-byte limit on a character boundary."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password_bytes
    logger.warning("Password exceeds 72 bytes, truncating before hashing (validation should have caught this)")
    truncated = password_bytes[:BCRYPT_MAX_BYTES]
    # Drop a trailing partial multi-byte character
    return truncated.decode("utf-8", errors="ignore").encode("utf-8")


def hash_password(password: str) -> str:
    """
    Hash a password with a per-password bcrypt salt.

    Args:
        password: Plain text password (max 72 bytes in UTF-8)

    Returns:
        Hashed password string (bcrypt format compatible with passlib)

    Raises:
        ValueError: If password cannot be hashed
    """
    try:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")
    except ValueError as e:
        logger.error(f"Password hashing failed (ValueError): {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    Supports both bcrypt-native hashes and passlib-wrapped hashes for backward compatibility.

    Returns:
        True if password matches hash, False otherwise
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        # Not a bcrypt-native hash, let passlib identify it
        try:
            return pwd_context.verify(password, hashed)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification failed on unrecognised hash: {e}")
            return False


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed bearer token binding the username and an expiry."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": subject, "iat": now, "exp": expire}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Validate a bearer token and return the username it was issued for.

    Raises:
        UnauthorizedError: signature invalid, token malformed or expired, or no subject
    """
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("Authentication failed: token has expired")
        raise UnauthorizedError("Token has expired")
    except JWTError as e:
        logger.warning(f"Authentication failed: invalid token - {e}")
        raise UnauthorizedError("Invalid token")

    username = payload.get("sub")
    if not username:
        logger.warning("Authentication failed: token has no subject")
        raise UnauthorizedError("Invalid token")
    return username
