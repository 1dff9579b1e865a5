"""
Floor Service — Orders API

Flow:
  1. Validate payload (name + at least one item)
  2. Price the order and try to seat the party (best-fit table)
  3. No table → party joins the waiting queue, order waits
  4. Return acknowledgment; external sync runs in the background
"""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from emerald.api.deps import get_engine, get_sync, http_error
from emerald.core.errors import FloorError
from emerald.engine.floor import CheckoutResult, FloorEngine
from emerald.models.order import OrderRequest as EngineOrderRequest, OrderStatus
from emerald.schemas.floor import CheckoutResponse
from emerald.schemas.order import (
    BillResponse,
    OrderOut,
    OrderRequest,
    OrderResponse,
    OrderRevision,
)
from emerald.tasks.sync import OrderSync

router = APIRouter(prefix="/orders", tags=["orders"])


def checkout_response(result: CheckoutResult, sync: OrderSync, background: BackgroundTasks) -> CheckoutResponse:
    """Shared by order completion and table checkout."""
    if result.completed is not None:
        background.add_task(sync.push, "completed", result.completed.to_dict())
    if result.reassigned is not None:
        background.add_task(sync.push, "seated", result.reassigned.to_dict())

    if not result.released and result.completed is None:
        message = f"Table {result.table_number} is already free."
    elif result.reassigned is not None:
        message = (
            f"Table {result.table_number} freed and reassigned to "
            f"{result.reassigned.customer_name} ({result.reassigned.order_id})."
        )
    elif result.table_number is not None:
        message = f"Table {result.table_number} is now free."
    else:
        message = f"Order {result.completed.order_id} completed."

    return CheckoutResponse(
        table_number=result.table_number,
        released=result.released,
        completed=OrderOut.model_validate(result.completed) if result.completed else None,
        reassigned=OrderOut.model_validate(result.reassigned) if result.reassigned else None,
        message=message,
    )


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderRequest,
    background: BackgroundTasks,
    engine: FloorEngine = Depends(get_engine),
    sync: OrderSync = Depends(get_sync),
):
    """
    Place an order. Seats the party straight away when a table fits,
    otherwise queues them and the order waits for a table.
    """
    try:
        placement = engine.create_order(EngineOrderRequest(
            customer_name=payload.name,
            items=[i.model_dump() for i in payload.items],
            people=payload.people,
            note=payload.note,
            payment_method=payload.payment_method,
            discount=payload.discount,
            tax_rate=payload.tax_rate,
        ))
    except FloorError as exc:
        raise http_error(exc)

    order = placement.order
    background.add_task(sync.push, "created", order.to_dict())

    if order.table_number is not None:
        message = f"Seated at table {order.table_number}."
    elif placement.queue_position is not None:
        message = f"No table free for {order.people}; waiting at position {placement.queue_position}."
    else:
        message = "Order sent to the kitchen."

    return OrderResponse(
        order_id=order.order_id,
        table_number=order.table_number,
        status=order.status,
        total_amount=order.total_amount,
        queue_position=placement.queue_position,
        message=message,
    )


@router.get("", response_model=list[OrderOut])
async def list_orders(
    status_filter: list[OrderStatus] | None = Query(
        None, alias="status", description="Filter by status (waiting_for_table, preparing, ready, completed)"
    ),
    engine: FloorEngine = Depends(get_engine),
):
    """Active orders, oldest first. Completed orders only appear when asked for by status."""
    return [OrderOut.model_validate(o) for o in engine.list_orders(status_filter)]


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(order_id: str, engine: FloorEngine = Depends(get_engine)):
    try:
        return OrderOut.model_validate(engine.get_bill(order_id))
    except FloorError as exc:
        raise http_error(exc)


@router.patch("/{order_id}", response_model=OrderOut)
async def revise_order(
    order_id: str,
    payload: OrderRevision,
    background: BackgroundTasks,
    engine: FloorEngine = Depends(get_engine),
    sync: OrderSync = Depends(get_sync),
):
    """Change discount and/or payment method; tax and total are recomputed."""
    if payload.discount is None and payload.payment_method is None:
        raise HTTPException(status_code=400, detail="Nothing to revise: send discount and/or paymentMethod.")
    try:
        order = engine.revise_order(order_id, discount=payload.discount, payment_method=payload.payment_method)
    except FloorError as exc:
        raise http_error(exc)
    background.add_task(sync.push, "revised", order.to_dict())
    return OrderOut.model_validate(order)


@router.post("/{order_id}/ready", response_model=OrderOut)
async def mark_ready(
    order_id: str,
    background: BackgroundTasks,
    engine: FloorEngine = Depends(get_engine),
    sync: OrderSync = Depends(get_sync),
):
    """Kitchen staff action: preparing → ready."""
    try:
        order = engine.mark_ready(order_id)
    except FloorError as exc:
        raise http_error(exc)
    background.add_task(sync.push, "ready", order.to_dict())
    return OrderOut.model_validate(order)


@router.post("/{order_id}/complete", response_model=CheckoutResponse)
async def complete_order(
    order_id: str,
    background: BackgroundTasks,
    engine: FloorEngine = Depends(get_engine),
    sync: OrderSync = Depends(get_sync),
):
    """Finalize the bill. A seated party's table is freed and reassigned."""
    try:
        result = engine.complete_order(order_id)
    except FloorError as exc:
        raise http_error(exc)
    return checkout_response(result, sync, background)


@router.get("/{order_id}/bill", response_model=BillResponse)
async def get_bill(order_id: str, engine: FloorEngine = Depends(get_engine)):
    """Bill for an order, whether still active or already completed."""
    try:
        return BillResponse.model_validate(engine.get_bill(order_id))
    except FloorError as exc:
        raise http_error(exc)
