from fastapi import APIRouter

from schemas.code import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="OK", message="Virtual Teaching Assistant Backend is running")
