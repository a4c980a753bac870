"""
Tests for per-user application statistics.
"""
from jobtracker.db.models.job_application import ApplicationStatus
from jobtracker.services.stats_service import get_statistics


def test_statistics_scenario(client):
    """Register alice, add APPLIED, APPLIED, INTERVIEW, then read the stats."""
    registered = client.post(
        "/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "pw1"},
    )
    assert registered.status_code == 201
    headers = {"Authorization": f"Bearer {registered.json()['token']}"}

    for status in ("APPLIED", "APPLIED", "INTERVIEW"):
        response = client.post(
            "/jobs",
            json={"title": "Engineer", "company": "Acme", "status": status, "appliedDate": "2026-01-15"},
            headers=headers,
        )
        assert response.status_code == 201

    response = client.get("/jobs/stats", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "total": 3,
        "applied": 2,
        "screening": 0,
        "interview": 1,
        "offer": 0,
        "accepted": 0,
        "rejected": 0,
        "withdrawn": 0,
    }


def test_statistics_are_per_user(db_session, alice, bob, make_application):
    make_application(alice, status=ApplicationStatus.OFFER)
    make_application(bob, status=ApplicationStatus.REJECTED)
    make_application(bob, status=ApplicationStatus.WITHDRAWN)

    alice_stats = get_statistics(db_session, alice.id)
    bob_stats = get_statistics(db_session, bob.id)

    assert alice_stats["total"] == 1
    assert alice_stats["offer"] == 1
    assert alice_stats["rejected"] == 0
    assert bob_stats["total"] == 2
    assert bob_stats["rejected"] == 1
    assert bob_stats["withdrawn"] == 1


def test_statistics_total_matches_status_counts(db_session, alice, make_application):
    for status in ApplicationStatus:
        make_application(alice, status=status)

    stats = get_statistics(db_session, alice.id)

    assert stats["total"] == len(ApplicationStatus)
    assert sum(value for key, value in stats.items() if key != "total") == stats["total"]


def test_statistics_for_user_without_applications(db_session, alice):
    stats = get_statistics(db_session, alice.id)

    assert set(stats) == {"total"} | {status.value.lower() for status in ApplicationStatus}
    assert all(value == 0 for value in stats.values())
