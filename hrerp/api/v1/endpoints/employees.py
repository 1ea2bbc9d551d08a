from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from hrerp.api.v1.errors import backend_failure, fetch_or_fail, invalid_request
from hrerp.core.dependencies import get_workspace
from hrerp.core.exceptions import BackendError
from hrerp.models.employee import Employee, EmployeeCreate, EmployeeStats, EmployeeUpdate
from hrerp.services.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[Employee])
async def list_employees(
    search: str = "",
    department: str | None = None,
    status_filter: str | None = Query(None, alias="status"),
    sort: str | None = None,
    order: str = Query("asc", pattern="^(asc|desc)$"),
    workspace: Workspace = Depends(get_workspace),
):
    store = workspace.employees
    await fetch_or_fail(store)

    matches = {employee.id for employee in store.search(search, department, status_filter)}
    ordered = store.sort(sort, order) if sort else store.items
    return [employee for employee in ordered if employee.id in matches]


@router.get("/stats", response_model=EmployeeStats)
async def employee_stats(workspace: Workspace = Depends(get_workspace)):
    await fetch_or_fail(workspace.employees)
    return workspace.employees.stats()


@router.get("/departments", response_model=list[str])
async def employee_departments(workspace: Workspace = Depends(get_workspace)):
    await fetch_or_fail(workspace.employees)
    return workspace.employees.list_departments()


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    await fetch_or_fail(workspace.employees)
    employee = workspace.employees.get(employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee '{employee_id}' not found",
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    workspace: Workspace = Depends(get_workspace),
):
    try:
        return await workspace.employees.add(payload)
    except ValueError as err:
        raise invalid_request(err) from err
    except BackendError as err:
        logger.exception("Failed to add employee")
        raise backend_failure(f"Failed to add employee: {err}") from err


@router.patch("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    workspace: Workspace = Depends(get_workspace),
):
    try:
        return await workspace.employees.update(employee_id, payload)
    except ValueError as err:
        raise invalid_request(err) from err
    except BackendError as err:
        logger.exception("Failed to update employee %s", employee_id)
        raise backend_failure(f"Failed to update employee: {err}") from err


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    workspace: Workspace = Depends(get_workspace),
):
    try:
        await workspace.employees.delete(employee_id)
    except BackendError as err:
        logger.exception("Failed to delete employee %s", employee_id)
        raise backend_failure(f"Failed to delete employee: {err}") from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)
