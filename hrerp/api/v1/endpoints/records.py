from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from hrerp.api.v1.errors import backend_failure, fetch_or_fail, invalid_request
from hrerp.core.dependencies import get_workspace
from hrerp.core.exceptions import BackendError
from hrerp.services.entity_store import EntityStore
from hrerp.services.workspace import RECORD_STORES, Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["records"])


def _store(workspace: Workspace, entity: str) -> EntityStore[Any]:
    if entity not in RECORD_STORES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown record type '{entity}'",
        )
    return workspace.store(entity)


@router.get("/{entity}")
async def list_records(
    entity: str,
    employee_id: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    sort: str | None = None,
    order: str = Query("asc", pattern="^(asc|desc)$"),
    workspace: Workspace = Depends(get_workspace),
):
    store = _store(workspace, entity)
    await fetch_or_fail(store)

    ordered = store.sort(sort, order) if sort else store.items
    matches = {item.id for item in store.filter_by(employee_id=employee_id, status=status_filter)}
    return [item.model_dump(mode="json") for item in ordered if item.id in matches]


@router.post("/{entity}", status_code=status.HTTP_201_CREATED)
async def create_record(
    entity: str,
    payload: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    store = _store(workspace, entity)
    try:
        item = await store.add(payload)
    except ValueError as err:
        raise invalid_request(err) from err
    except BackendError as err:
        logger.exception("Failed to add %s", store.label)
        raise backend_failure(f"Failed to add {store.label}: {err}") from err
    return item.model_dump(mode="json")


@router.patch("/{entity}/{item_id}")
async def update_record(
    entity: str,
    item_id: str,
    payload: dict[str, Any] = Body(...),
    workspace: Workspace = Depends(get_workspace),
):
    store = _store(workspace, entity)
    try:
        item = await store.update(item_id, payload)
    except ValueError as err:
        raise invalid_request(err) from err
    except BackendError as err:
        logger.exception("Failed to update %s %s", store.label, item_id)
        raise backend_failure(f"Failed to update {store.label}: {err}") from err
    return item.model_dump(mode="json")


@router.delete("/{entity}/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    entity: str,
    item_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    store = _store(workspace, entity)
    try:
        await store.delete(item_id)
    except BackendError as err:
        logger.exception("Failed to delete %s %s", store.label, item_id)
        raise backend_failure(f"Failed to delete {store.label}: {err}") from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
