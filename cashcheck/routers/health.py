from fastapi import APIRouter, Depends

from cashcheck.core.config import Settings
from .deps import get_app_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness check")
async def health(settings: Settings = Depends(get_app_settings)):
    return {"status": "ok", "version": settings.version}
