"""
Floor Service — Table, dashboard and stats schemas
"""
from datetime import datetime

from emerald.schemas.order import CamelModel, OrderOut, QueueEntryOut


class SeatingOut(CamelModel):
    party_name: str
    people: int
    seated_at: datetime
    order_id: str


class TableOut(CamelModel):
    number: int
    capacity: int
    occupied: bool
    current: SeatingOut | None = None


class TableDetail(TableOut):
    order: OrderOut | None = None


class CheckoutResponse(CamelModel):
    table_number: int | None
    released: bool
    completed: OrderOut | None = None
    reassigned: OrderOut | None = None
    message: str


class DashboardResponse(CamelModel):
    tables: list[TableDetail]
    queue: list[QueueEntryOut]
    active_orders: list[OrderOut]
    completed_count: int
    revenue: float


class StatsResponse(CamelModel):
    total_orders: int
    active_orders: int
    completed_orders: int
    by_status: dict[str, int]
    queue_length: int
    occupied_tables: int
    free_tables: int
    revenue: float
    average_ticket: float


class MenuItemOut(CamelModel):
    name: str
    price: float
    category: str


class TableDefinitionOut(CamelModel):
    number: int
    capacity: int


class MenuResponse(CamelModel):
    menu: list[MenuItemOut]
    categories: list[str]
    tables: list[TableDefinitionOut]
