from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from hrerp.services.entity_store import EntityStore, LoadState


def backend_failure(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


def invalid_request(err: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(err))


async def fetch_or_fail(store: EntityStore[Any]) -> list[Any]:
    """Fetch the store and turn a swallowed backend error into a 502."""
    items = await store.fetch_all()
    if store.state == LoadState.ERROR:
        raise backend_failure(f"Failed to retrieve {store.plural}: {store.error}")
    return items
