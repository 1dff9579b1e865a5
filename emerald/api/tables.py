"""
Floor Service — Tables API (checkout frees and reassigns)
"""
from fastapi import APIRouter, BackgroundTasks, Depends

from emerald.api.deps import get_engine, get_sync, http_error
from emerald.api.orders import checkout_response
from emerald.core.errors import TableNotFound
from emerald.engine.floor import FloorEngine
from emerald.schemas.floor import CheckoutResponse, TableOut
from emerald.tasks.sync import OrderSync

router = APIRouter(prefix="/tables", tags=["tables"])


@router.get("", response_model=list[TableOut])
async def list_tables(engine: FloorEngine = Depends(get_engine)):
    return [TableOut.model_validate(t) for t in engine.tables()]


@router.get("/{table_number}", response_model=TableOut)
async def get_table(table_number: int, engine: FloorEngine = Depends(get_engine)):
    try:
        return TableOut.model_validate(engine.table(table_number))
    except TableNotFound as exc:
        raise http_error(exc)


@router.post("/{table_number}/free", response_model=CheckoutResponse)
async def free_table(
    table_number: int,
    background: BackgroundTasks,
    engine: FloorEngine = Depends(get_engine),
    sync: OrderSync = Depends(get_sync),
):
    """
    Checkout: complete the table's order, free the table and seat the first
    queued party that fits. Freeing an already free table is a no-op.
    """
    if not engine.has_table(table_number):
        raise http_error(TableNotFound(table_number))
    return checkout_response(engine.free_table(table_number), sync, background)
