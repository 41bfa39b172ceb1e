from fastapi import APIRouter
from apis.v1.route_health import router as health_router
from apis.v1.route_sandbox import router as sandbox_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/api", tags=["health"])
api_router.include_router(sandbox_router, prefix="/api", tags=["sandbox"])
