from __future__ import annotations

from hrerp.core.exceptions import BackendError
from tests.conftest import TEST_USER_ID


def test_me_returns_resolved_user(authenticated_client, fake_backend):
    fake_backend.select.return_value = {
        "id": TEST_USER_ID,
        "first_name": "Jane",
        "last_name": "Doe",
        "email": None,
        "role": "manager",
        "avatar_url": None,
    }

    response = authenticated_client.get("/api/v1/me")

    assert response.status_code == 200
    data = response.json()
    assert data["authenticated"] is True
    assert data["user"]["name"] == "Jane Doe"
    assert data["user"]["email"] == "jane.doe@example.com"
    assert data["user"]["role"] == "manager"


def test_me_without_profile_is_still_authenticated(authenticated_client, fake_backend):
    fake_backend.select.side_effect = BackendError("JSON object requested, multiple (or no) rows returned")

    response = authenticated_client.get("/api/v1/me")

    assert response.status_code == 200
    assert response.json() == {"authenticated": True, "user": None}


def test_logout_signs_out(authenticated_client, fake_backend):
    response = authenticated_client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"status": "signed_out"}
    fake_backend.sign_out.assert_awaited_once()


def test_logout_failure_returns_502(authenticated_client, fake_backend):
    fake_backend.sign_out.side_effect = BackendError("session not found")

    response = authenticated_client.post("/api/v1/auth/logout")

    assert response.status_code == 502
    assert "session not found" in response.json()["detail"]
