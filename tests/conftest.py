from __future__ import annotations

import time
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from jose import jwt
from starlette.testclient import TestClient

from hrerp.core.dependencies import get_backend
from hrerp.core.notifications import NotificationVariant
from hrerp.main import app

TEST_JWT_SECRET = "test-jwt-secret-0000000000000000000000000000"
TEST_AUDIENCE = "authenticated"
TEST_USER_ID = "3f1c9a52-0000-4000-8000-000000000001"


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, NotificationVariant]] = []

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> None:
        self.calls.append((title, description, variant))


def employee_row(**overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": "emp-1",
        "employee_id": "EMP000001",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@example.com",
        "phone": None,
        "department": "Engineering",
        "position": "Backend Engineer",
        "location": "Berlin",
        "hire_date": "2022-01-10",
        "salary": 85000,
        "status": "active",
        "manager_id": None,
        "avatar_url": None,
        "user_id": None,
        "created_at": "2024-01-01T09:00:00+00:00",
        "updated_at": "2024-01-01T09:00:00+00:00",
    }
    row.update(overrides)
    return row


def make_token(
    *,
    sub: str = TEST_USER_ID,
    email: str = "jane.doe@example.com",
    audience: str = TEST_AUDIENCE,
    secret: str = TEST_JWT_SECRET,
    expired: bool = False,
) -> str:
    now = int(time.time())
    claims = {
        "sub": sub,
        "email": email,
        "role": "authenticated",
        "aud": audience,
        "exp": now - 3600 if expired else now + 3600,
        "iat": now - 60,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def _auth_settings():
    from hrerp.core.config import settings

    original_secret = settings.SUPABASE_JWT_SECRET
    settings.SUPABASE_JWT_SECRET = TEST_JWT_SECRET
    yield
    settings.SUPABASE_JWT_SECRET = original_secret


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fake_backend() -> MagicMock:
    backend = MagicMock()
    backend.select = AsyncMock(return_value=[])
    backend.insert = AsyncMock(return_value={})
    backend.update = AsyncMock(return_value={})
    backend.delete = AsyncMock(return_value=None)
    backend.sign_out = AsyncMock(return_value=None)
    return backend


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def authenticated_client(fake_backend):
    app.dependency_overrides[get_backend] = lambda: fake_backend
    with TestClient(app) as c:
        c.headers.update({"Authorization": f"Bearer {make_token()}"})
        yield c
    app.dependency_overrides.clear()
