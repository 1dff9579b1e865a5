"""
Floor Service — Manager dashboard, queue, stats and menu
"""
from fastapi import APIRouter, Depends

from emerald.api.deps import get_engine
from emerald.engine.floor import FloorEngine
from emerald.schemas.floor import (
    DashboardResponse,
    MenuItemOut,
    MenuResponse,
    SeatingOut,
    StatsResponse,
    TableDefinitionOut,
    TableDetail,
)
from emerald.schemas.order import OrderOut, QueueEntryOut

router = APIRouter(tags=["manager"])


@router.get("/manager/dashboard", response_model=DashboardResponse)
async def dashboard(engine: FloorEngine = Depends(get_engine)):
    """Every table with the order sitting at it, the queue, and takings so far."""
    snap = engine.dashboard()
    tables = [
        TableDetail(
            number=view.table.number,
            capacity=view.table.capacity,
            occupied=view.table.occupied,
            current=SeatingOut.model_validate(view.table.current) if view.table.current else None,
            order=OrderOut.model_validate(view.order) if view.order else None,
        )
        for view in snap.tables
    ]
    return DashboardResponse(
        tables=tables,
        queue=[QueueEntryOut.model_validate(e) for e in snap.queue],
        active_orders=[OrderOut.model_validate(o) for o in snap.active_orders],
        completed_count=snap.completed_count,
        revenue=snap.revenue,
    )


@router.get("/queue", response_model=list[QueueEntryOut])
async def waiting_queue(engine: FloorEngine = Depends(get_engine)):
    return [QueueEntryOut.model_validate(e) for e in engine.queue()]


@router.get("/stats", response_model=StatsResponse)
async def stats(engine: FloorEngine = Depends(get_engine)):
    return StatsResponse.model_validate(engine.stats())


@router.get("/menu", response_model=MenuResponse)
async def menu(engine: FloorEngine = Depends(get_engine)):
    catalog = engine.catalog
    categories = list(dict.fromkeys(item.category for item in catalog.menu))
    return MenuResponse(
        menu=[MenuItemOut.model_validate(i) for i in catalog.menu],
        categories=categories,
        tables=[TableDefinitionOut.model_validate(t) for t in catalog.tables],
    )
