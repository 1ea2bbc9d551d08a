from __future__ import annotations

from fastapi import APIRouter, Depends

from hrerp.api.v1.errors import fetch_or_fail
from hrerp.core.dependencies import get_workspace
from hrerp.services.dashboard_service import DashboardMetrics, build_dashboard
from hrerp.services.workspace import Workspace

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardMetrics)
async def dashboard(workspace: Workspace = Depends(get_workspace)):
    user = await workspace.session.refresh()
    await fetch_or_fail(workspace.employees)
    await fetch_or_fail(workspace.attendance)
    await fetch_or_fail(workspace.leave_requests)
    await fetch_or_fail(workspace.performance_reviews)

    return build_dashboard(
        user,
        workspace.employees,
        workspace.attendance,
        workspace.leave_requests,
        workspace.performance_reviews,
    )
