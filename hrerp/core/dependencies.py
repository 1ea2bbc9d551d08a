from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, Header, HTTPException, status

from hrerp.core.auth import principal_from_payload, validate_token
from hrerp.core.config import settings
from hrerp.models.auth import Principal
from hrerp.services.backend_client import backend_client
from hrerp.services.workspace import Workspace

logger = logging.getLogger(__name__)


async def get_access_token(authorization: str | None = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return authorization.split(" ", 1)[1]


async def get_principal(token: str = Depends(get_access_token)) -> Principal:
    try:
        payload = validate_token(token, settings.SUPABASE_JWT_SECRET, settings.SUPABASE_JWT_AUDIENCE)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Token validation error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return principal_from_payload(payload)


async def get_backend(token: str = Depends(get_access_token)) -> Any:
    if not backend_client.initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Backend not configured",
        )
    return backend_client.for_token(token)


async def get_workspace(
    principal: Principal = Depends(get_principal),
    backend: Any = Depends(get_backend),
) -> Workspace:
    return Workspace(backend, settings, principal)
