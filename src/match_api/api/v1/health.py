from fastapi import APIRouter

from match_api.models.common import HealthData

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthData)
async def health() -> HealthData:
    return HealthData(status="UP")
