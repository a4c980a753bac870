"""
Tests for user registration, authentication and admin-side user operations.
"""
import pytest

from jobtracker.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from jobtracker.core.security import verify_password
from jobtracker.db.models.job_application import JobApplication
from jobtracker.db.models.user import Role, User
from jobtracker.services import user_service


def test_register_user_creates_user_role(db_session):
    user = user_service.register_user(db_session, "carol", "carol@example.com", "pw1")

    assert user.id is not None
    assert user.role == Role.USER
    assert user.password_hash != "pw1"
    assert verify_password("pw1", user.password_hash)


def test_register_duplicate_username(db_session, alice):
    with pytest.raises(ConflictError) as exc_info:
        user_service.register_user(db_session, "alice", "new@example.com", "pw1")
    assert exc_info.value.message == user_service.USERNAME_TAKEN


def test_register_duplicate_email(db_session, alice):
    with pytest.raises(ConflictError) as exc_info:
        user_service.register_user(db_session, "alice2", alice.email, "pw1")
    assert exc_info.value.message == user_service.EMAIL_TAKEN


def test_register_race_is_reported_as_conflict(db_session, alice, monkeypatch):
    """A concurrent insert that passes the pre-check still ends in a conflict."""
    answers = iter([False, True])
    monkeypatch.setattr(user_service, "username_exists", lambda db, username: next(answers))
    monkeypatch.setattr(user_service, "email_exists", lambda db, email: False)

    with pytest.raises(ConflictError) as exc_info:
        user_service.register_user(db_session, "alice", "other@example.com", "pw1")

    assert exc_info.value.message == user_service.USERNAME_TAKEN
    assert db_session.query(User).filter(User.username == "alice").count() == 1


def test_authenticate_user(db_session, alice):
    assert user_service.authenticate_user(db_session, "alice", "secret123").id == alice.id


@pytest.mark.parametrize("username,password", [("alice", "wrong"), ("nobody", "secret123")])
def test_authenticate_user_failures_look_the_same(db_session, alice, username, password):
    with pytest.raises(UnauthorizedError) as exc_info:
        user_service.authenticate_user(db_session, username, password)
    assert exc_info.value.message == "Invalid username or password"


def test_list_users_with_counts(db_session, alice, bob, admin, make_application):
    make_application(alice)
    make_application(alice)
    make_application(bob)

    counts = {user.username: count for user, count in user_service.list_users_with_counts(db_session)}

    assert counts == {"alice": 2, "bob": 1, "root": 0}


def test_get_user_with_count_unknown(db_session):
    with pytest.raises(NotFoundError):
        user_service.get_user_with_count(db_session, 999)


def test_set_role(db_session, alice):
    user_service.set_role(db_session, "alice", Role.ADMIN)
    assert user_service.get_user(db_session, alice.id).role == Role.ADMIN

    user_service.set_role(db_session, "alice", Role.USER)
    assert user_service.get_user(db_session, alice.id).role == Role.USER


def test_set_role_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        user_service.set_role(db_session, "ghost", Role.ADMIN)


def test_delete_user_removes_owned_applications(db_session, alice, bob, make_application):
    for _ in range(3):
        make_application(alice)
    kept = make_application(bob).id
    alice_id = alice.id

    removed = user_service.delete_user(db_session, alice_id)

    assert removed == 3
    assert db_session.query(User).filter(User.id == alice_id).count() == 0
    assert db_session.query(JobApplication).filter(JobApplication.user_id == alice_id).count() == 0
    assert [app.id for app in db_session.query(JobApplication).all()] == [kept]


def test_delete_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        user_service.delete_user(db_session, 999)
