# app/routers/health.py — liveness metadata

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings

router = APIRouter()


@router.get("/")
@router.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {
        "message": "Employee search relay is running",
        "provider": settings.search_provider,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
