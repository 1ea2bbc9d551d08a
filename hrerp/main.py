from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrerp.api.v1.router import api_router
from hrerp.core.config import settings
from hrerp.services.backend_client import backend_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await backend_client.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize BackendClient — continuing without backend")
    yield
    await backend_client.close()


app = FastAPI(
    title="HR ERP API",
    description="Employee, attendance, leave, payroll and learning records over Supabase",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "HR ERP API"}
