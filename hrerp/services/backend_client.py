"""REST client for the hosted database and auth service (PostgREST + GoTrue)."""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from enum import Enum
from typing import Any

import aiohttp

from hrerp.core.config import Settings
from hrerp.core.exceptions import BackendError

logger = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_params(
    filters: dict[str, Any] | None = None,
    order: tuple[str, bool] | None = None,
    select: str | None = None,
) -> dict[str, str]:
    """Translate equality filters and ordering into PostgREST query parameters.

    ``order`` is ``(column, descending)``.
    """
    params: dict[str, str] = {}
    if select:
        params["select"] = select
    for column, value in (filters or {}).items():
        op = "is" if value is None else "eq"
        params[column] = f"{op}.{_format_value(value)}"
    if order:
        column, descending = order
        params["order"] = f"{column}.{'desc' if descending else 'asc'}"
    return params


class BackendClient:
    def __init__(self) -> None:
        self.initialized = False
        self.url = ""
        self.api_key = ""
        self.access_token: str | None = None

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
            logger.warning("Supabase credentials missing — BackendClient not initialized")
            return

        self.url = settings.SUPABASE_URL.rstrip("/")
        self.api_key = settings.SUPABASE_ANON_KEY
        self.initialized = True
        logger.info("BackendClient initialized (url=%s)", self.url)

    async def close(self) -> None:
        self.initialized = False
        self.url = ""
        self.api_key = ""
        self.access_token = None

    def for_token(self, access_token: str | None) -> BackendClient:
        """Return a copy that sends requests on behalf of ``access_token``."""
        bound = copy.copy(self)
        bound.access_token = access_token
        return bound

    def _headers(self, single: bool = False, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": _SINGLE_OBJECT if single else "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        payload: Any = None,
        single: bool = False,
        prefer: str | None = None,
    ) -> Any:
        if not self.initialized:
            raise RuntimeError("BackendClient not initialized")

        url = f"{self.url}{path}"
        headers = self._headers(single=single, prefer=prefer)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(
                    method, url, headers=headers, params=params, json=payload
                ) as response:
                    if 200 <= response.status < 300:
                        if response.status == 204:
                            return None
                        return await response.json(content_type=None)

                    raise await self._error_from_response(response)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Backend request %s %s failed: %s", method, path, e)
            raise BackendError(str(e) or type(e).__name__) from e

    async def _error_from_response(self, response: Any) -> BackendError:
        text = await response.text()
        message = text or f"HTTP {response.status}"
        code = None
        try:
            body = json.loads(text) if text else None
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("msg") or body.get("error_description") or message
            code = body.get("code")
        return BackendError(str(message), status=response.status, code=code)

    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order: tuple[str, bool] | None = None,
        single: bool = False,
        columns: str = "*",
    ) -> Any:
        params = build_params(filters, order, select=columns)
        return await self._request("GET", f"/rest/v1/{table}", params=params, single=single)

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/rest/v1/{table}",
            params={"select": "*"},
            payload=[row],
            single=True,
            prefer="return=representation",
        )

    async def update(
        self,
        table: str,
        patch: dict[str, Any],
        *,
        filters: dict[str, Any],
    ) -> dict[str, Any]:
        if not filters:
            raise ValueError("update requires at least one filter")
        return await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=build_params(filters, select="*"),
            payload=patch,
            single=True,
            prefer="return=representation",
        )

    async def delete(self, table: str, *, filters: dict[str, Any]) -> None:
        if not filters:
            raise ValueError("delete requires at least one filter")
        await self._request("DELETE", f"/rest/v1/{table}", params=build_params(filters))

    async def sign_out(self) -> None:
        if not self.access_token:
            return
        await self._request("POST", "/auth/v1/logout")

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False
        try:
            await self._request("GET", "/rest/v1/", params={})
            return True
        except Exception:
            logger.exception("Backend connection check failed")
            return False


backend_client = BackendClient()
