from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from hrerp.api.v1.errors import backend_failure
from hrerp.core.dependencies import get_workspace
from hrerp.core.exceptions import BackendError
from hrerp.models.auth import SessionInfo
from hrerp.services.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


@router.get("/me", response_model=SessionInfo)
async def current_session(workspace: Workspace = Depends(get_workspace)):
    user = await workspace.session.refresh()
    return SessionInfo(authenticated=workspace.session.is_authenticated, user=user)


@router.post("/auth/logout")
async def logout(workspace: Workspace = Depends(get_workspace)):
    try:
        await workspace.session.logout()
    except BackendError as err:
        logger.exception("Sign-out failed")
        raise backend_failure(f"Failed to sign out: {err}") from err
    return {"status": "signed_out"}
