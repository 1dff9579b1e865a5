"""
Floor Service — Health endpoint
"""
import asyncio
import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from emerald.api.deps import get_engine, get_sync
from emerald.core.config import get_settings
from emerald.engine.floor import FloorEngine
from emerald.tasks.sync import OrderSync

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(engine: FloorEngine = Depends(get_engine), sync: OrderSync = Depends(get_sync)):
    deps: dict[str, str] = {}
    healthy = True

    try:
        stats = engine.stats()
        deps["floor"] = f"ok: {stats.free_tables} free tables, {stats.queue_length} waiting"
    except Exception as e:
        deps["floor"] = f"error: {str(e)[:100]}"
        healthy = False

    # Sync target is best-effort; being down degrades reporting, not the service
    if not sync.enabled:
        deps["order-sync"] = "disabled"
    else:
        try:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
                r = await asyncio.wait_for(client.head(sync.url), timeout=settings.HTTP_TIMEOUT_SECONDS)
                deps["order-sync"] = "ok" if r.status_code < 500 else f"degraded: {r.status_code}"
        except Exception as e:
            deps["order-sync"] = f"unreachable: {str(e)[:100]}"

    return JSONResponse(
        content={
            "status": "healthy" if healthy else "degraded",
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "dependencies": deps,
        },
        status_code=200 if healthy else 503,
    )
