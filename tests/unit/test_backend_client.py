from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from hrerp.core.config import Settings
from hrerp.core.exceptions import BackendError
from hrerp.models.schema import EmploymentStatus
from hrerp.services.backend_client import BackendClient, build_params


def _make_settings() -> Settings:
    return Settings(
        SUPABASE_URL="https://project.supabase.co/",
        SUPABASE_ANON_KEY="anon-key",
    )


def _mock_session(response: MagicMock) -> MagicMock:
    mock_request_context = AsyncMock()
    mock_request_context.__aenter__.return_value = response
    mock_request_context.__aexit__.return_value = None

    session = MagicMock()
    session.request.return_value = mock_request_context
    return session


def _mock_client_session(session: MagicMock) -> AsyncMock:
    mock_client_session = AsyncMock()
    mock_client_session.__aenter__.return_value = session
    mock_client_session.__aexit__.return_value = None
    return mock_client_session


def _response(status: int, body=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=text)
    return response


async def _client() -> BackendClient:
    client = BackendClient()
    await client.initialize(_make_settings())
    return client


def test_build_params():
    params = build_params(
        {"id": "e1", "status": EmploymentStatus.ACTIVE, "manager_id": None, "is_active": True},
        ("created_at", True),
        select="*",
    )

    assert params == {
        "select": "*",
        "id": "eq.e1",
        "status": "eq.active",
        "manager_id": "is.null",
        "is_active": "eq.true",
        "order": "created_at.desc",
    }
    assert build_params(order=("name", False)) == {"order": "name.asc"}


@pytest.mark.anyio
async def test_initialize_without_credentials_stays_uninitialized():
    client = BackendClient()
    await client.initialize(Settings())

    assert client.initialized is False
    with pytest.raises(RuntimeError):
        await client.select("employees")


@pytest.mark.anyio
async def test_select_sends_ordering_and_auth_headers():
    client = (await _client()).for_token("user-token")
    session = _mock_session(_response(200, [{"id": "e1"}]))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        rows = await client.select("employees", order=("created_at", True))

    assert rows == [{"id": "e1"}]
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert method == "GET"
    assert url == "https://project.supabase.co/rest/v1/employees"
    assert kwargs["params"] == {"select": "*", "order": "created_at.desc"}
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer user-token"
    assert kwargs["headers"]["Accept"] == "application/json"


@pytest.mark.anyio
async def test_select_single_requests_object():
    client = await _client()
    session = _mock_session(_response(200, {"id": "u1"}))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        row = await client.select("profiles", filters={"id": "u1"}, single=True)

    assert row == {"id": "u1"}
    kwargs = session.request.call_args.kwargs
    assert kwargs["params"]["id"] == "eq.u1"
    assert kwargs["headers"]["Accept"] == "application/vnd.pgrst.object+json"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"


@pytest.mark.anyio
async def test_insert_returns_representation():
    client = await _client()
    session = _mock_session(_response(201, {"id": "new"}))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        row = await client.insert("courses", {"title": "Onboarding"})

    assert row == {"id": "new"}
    kwargs = session.request.call_args.kwargs
    assert session.request.call_args.args[0] == "POST"
    assert kwargs["json"] == [{"title": "Onboarding"}]
    assert kwargs["headers"]["Prefer"] == "return=representation"


@pytest.mark.anyio
async def test_update_and_delete_filter_by_id():
    client = await _client()
    session = _mock_session(_response(204))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        await client.delete("employees", filters={"id": "e1"})

    assert session.request.call_args.args[0] == "DELETE"
    assert session.request.call_args.kwargs["params"] == {"id": "eq.e1"}

    with pytest.raises(ValueError):
        await client.update("employees", {"position": "CTO"}, filters={})


@pytest.mark.anyio
async def test_error_response_raises_backend_error():
    client = await _client()
    body = '{"code":"42501","message":"new row violates row-level security policy for table \\"employees\\""}'
    session = _mock_session(_response(403, text=body))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        with pytest.raises(BackendError) as exc_info:
            await client.insert("employees", {"email": "x@example.com"})

    assert exc_info.value.status == 403
    assert exc_info.value.code == "42501"
    assert "row-level security" in str(exc_info.value)


@pytest.mark.anyio
async def test_transport_error_is_wrapped():
    client = await _client()
    session = MagicMock()
    session.request.side_effect = aiohttp.ClientConnectionError("connection refused")

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        with pytest.raises(BackendError, match="connection refused"):
            await client.select("employees")


@pytest.mark.anyio
async def test_sign_out_without_token_is_noop():
    client = await _client()

    with patch("hrerp.services.backend_client.aiohttp.ClientSession") as mock_cls:
        await client.sign_out()

    mock_cls.assert_not_called()


@pytest.mark.anyio
async def test_sign_out_posts_logout():
    client = (await _client()).for_token("user-token")
    session = _mock_session(_response(204))

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        await client.sign_out()

    method, url = session.request.call_args.args
    assert method == "POST"
    assert url == "https://project.supabase.co/auth/v1/logout"


@pytest.mark.anyio
async def test_check_connection_not_initialized():
    assert await BackendClient().check_connection() is False


@pytest.mark.anyio
async def test_timeout_is_wrapped():
    client = await _client()
    session = MagicMock()
    session.request.side_effect = asyncio.TimeoutError()

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        with pytest.raises(BackendError, match="TimeoutError"):
            await client.select("employees")


@pytest.mark.anyio
async def test_malformed_success_body_is_wrapped():
    client = await _client()
    response = _response(200)
    response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
    session = _mock_session(response)

    with patch("hrerp.services.backend_client.aiohttp.ClientSession", return_value=_mock_client_session(session)):
        with pytest.raises(BackendError, match="Expecting value"):
            await client.select("employees")
