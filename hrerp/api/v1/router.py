from fastapi import APIRouter

from hrerp.api.v1.endpoints import dashboard, employees, health, records, session

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(session.router)
api_router.include_router(employees.router)
api_router.include_router(records.router)
api_router.include_router(dashboard.router)
