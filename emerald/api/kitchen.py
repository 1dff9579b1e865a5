"""
Floor Service — Kitchen display board
"""
from fastapi import APIRouter, Depends

from emerald.api.deps import get_engine
from emerald.engine.floor import FloorEngine
from emerald.schemas.order import KitchenBoard, OrderOut, QueueEntryOut

router = APIRouter(prefix="/kitchen", tags=["kitchen"])


@router.get("/orders", response_model=KitchenBoard)
async def kitchen_board(engine: FloorEngine = Depends(get_engine)):
    """
    Orders being cooked or waiting at the pass, plus queued parties whose
    food has not been started because they have no table yet.
    """
    cooking, waiting = engine.kitchen_view()
    return KitchenBoard(
        orders=[OrderOut.model_validate(o) for o in cooking],
        waiting=[QueueEntryOut.model_validate(e) for e in waiting],
    )
