from fastapi import APIRouter

from alertwatch.api.v1.schemas.alerts import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health():
    return HealthOut(status="ok")
