"""
Floor Service — Shared route dependencies
"""
from fastapi import HTTPException, Request, status

from emerald.core.errors import (
    FloorError,
    InvalidTransition,
    OrderLocked,
    OrderNotFound,
    TableNotFound,
)
from emerald.engine.floor import FloorEngine
from emerald.tasks.sync import OrderSync


def get_engine(request: Request) -> FloorEngine:
    return request.app.state.engine


def get_sync(request: Request) -> OrderSync:
    return request.app.state.sync


def http_error(exc: FloorError) -> HTTPException:
    if isinstance(exc, (OrderNotFound, TableNotFound)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, OrderLocked):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, InvalidTransition):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
