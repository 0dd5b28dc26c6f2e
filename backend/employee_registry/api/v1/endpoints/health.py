from __future__ import annotations

from fastapi import APIRouter

from employee_registry.core.config import settings
from employee_registry.services.record_store import record_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    if not record_store.initialized:
        storage = "not_configured"
    elif record_store.dirty:
        storage = "pending_write"
    else:
        storage = "ok"

    return {
        "status": "healthy" if storage in ("ok", "not_configured") else "degraded",
        "version": settings.APP_VERSION,
        "services": {"storage": storage},
        "records": len(record_store),
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
