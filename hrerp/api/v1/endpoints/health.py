from __future__ import annotations

from fastapi import APIRouter, Depends

from hrerp.core.config import settings
from hrerp.core.dependencies import get_principal
from hrerp.models.auth import Principal
from hrerp.services.backend_client import backend_client

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    try:
        if backend_client.initialized:
            ok = await backend_client.check_connection()
            services["supabase"] = "ok" if ok else "error"
        else:
            services["supabase"] = "not_configured"
    except Exception:
        services["supabase"] = "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/protected")
async def health_protected(principal: Principal = Depends(get_principal)):
    return {"status": "ok", "principal": principal.model_dump()}


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
