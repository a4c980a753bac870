"""
Tests for the admin user views.
"""


def test_list_users_with_application_counts(client, alice, bob, admin_headers, make_application):
    make_application(alice)
    make_application(alice)

    response = client.get("/admin/users", headers=admin_headers)

    assert response.status_code == 200
    counts = {user["username"]: user["applicationCount"] for user in response.json()}
    assert counts == {"alice": 2, "bob": 0, "root": 0}


def test_user_summary_exposes_no_application_data(client, alice, admin_headers, make_application):
    make_application(alice, notes="private")

    response = client.get(f"/admin/users/{alice.id}", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"id", "username", "email", "role", "createdAt", "applicationCount"}
    assert body["username"] == "alice"
    assert body["role"] == "USER"
    assert body["applicationCount"] == 1
    assert "private" not in response.text


def test_get_unknown_user(client, admin_headers):
    response = client.get("/admin/users/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found with id: 999"


def test_regular_user_is_forbidden(client, alice, alice_headers):
    response = client.get(f"/admin/users/{alice.id}", headers=alice_headers)

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"


def test_admin_jobs_are_still_own_only(client, alice, admin_headers, make_application):
    make_application(alice)

    response = client.get("/jobs", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["totalElements"] == 0
