"""
Tests for password hashing and bearer token issue/validation.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from jobtracker.core import config
from jobtracker.core.exceptions import UnauthorizedError
from jobtracker.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_password_is_salted_and_verifiable():
    """Same password hashes differently each time but verifies against both hashes."""
    first = hash_password("pw1")
    second = hash_password("pw1")

    assert first != "pw1"
    assert first != second
    assert verify_password("pw1", first)
    assert verify_password("pw1", second)
    assert not verify_password("pw2", first)


def test_verify_password_rejects_garbage_hash():
    assert verify_password("pw1", "not-a-hash") is False
    assert verify_password("pw1", "") is False


def test_password_over_72_bytes_is_clamped():
    """bcrypt only sees the first 72 bytes."""
    long_password = "a" * 80
    hashed = hash_password(long_password)
    assert verify_password("a" * 72, hashed)


def test_token_round_trip():
    token = create_access_token("alice")
    assert decode_access_token(token) == "alice"


def test_token_carries_expiry():
    token = create_access_token("alice", expires_delta=timedelta(minutes=5))
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "alice"
    assert claims["exp"] > claims["iat"]


def test_expired_token_rejected():
    token = create_access_token("alice", expires_delta=timedelta(seconds=-10))
    with pytest.raises(UnauthorizedError) as exc_info:
        decode_access_token(token)
    assert exc_info.value.message == "Token has expired"


def test_token_signed_with_other_key_rejected():
    expire = datetime.now(timezone.utc) + timedelta(minutes=5)
    forged = jwt.encode({"sub": "alice", "exp": expire}, "some-other-key", algorithm=config.ALGORITHM)
    with pytest.raises(UnauthorizedError):
        decode_access_token(forged)


def test_malformed_token_rejected():
    with pytest.raises(UnauthorizedError):
        decode_access_token("not-a-token")


def test_token_without_subject_rejected():
    expire = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"exp": expire}, config.SECRET_KEY, algorithm=config.ALGORITHM)
    with pytest.raises(UnauthorizedError):
        decode_access_token(token)
