"""
Floor Service — Pydantic Schemas

Wire format is camelCase (orderId, tableNumber, totalAmount, ...), matching
the dashboard client.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from emerald.models.order import OrderStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ── Requests ──────────────────────────────────────────────────────────────────
# Far above any real ticket, well inside Decimal's 28-digit precision
MAX_ITEM_PRICE = 100_000
MAX_DISCOUNT = 1_000_000


class OrderItemRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120, examples=["Margherita Pizza"])
    price: float | None = Field(None, ge=0, le=MAX_ITEM_PRICE, allow_inf_nan=False)
    quantity: int = Field(1, ge=1, le=100)


class OrderRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=120, examples=["Ada"])
    items: list[OrderItemRequest] = Field(..., min_length=1, max_length=50)
    people: int = Field(0, ge=0, le=50)
    note: str = Field("", max_length=500)
    payment_method: str | None = Field(None, max_length=40)
    discount: float = Field(0, ge=0, le=MAX_DISCOUNT, allow_inf_nan=False)
    tax_rate: float | None = Field(None, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class OrderRevision(CamelModel):
    discount: float | None = Field(None, ge=0, le=MAX_DISCOUNT, allow_inf_nan=False)
    payment_method: str | None = Field(None, min_length=1, max_length=40)


# ── Responses ─────────────────────────────────────────────────────────────────

class LineItemOut(CamelModel):
    name: str
    price: float
    quantity: int


class OrderOut(CamelModel):
    order_id: str
    customer_name: str
    items: list[LineItemOut]
    people: int
    note: str
    payment_method: str
    subtotal: float
    discount: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    status: OrderStatus
    table_number: int | None = None
    created_at: datetime
    ready_at: datetime | None = None
    completed_at: datetime | None = None


class OrderResponse(CamelModel):
    order_id: str
    table_number: int | None
    status: OrderStatus
    total_amount: float
    queue_position: int | None = None
    message: str


class BillResponse(CamelModel):
    order_id: str
    customer_name: str
    items: list[LineItemOut]
    subtotal: float
    discount: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    payment_method: str
    status: OrderStatus
    table_number: int | None = None


class QueueEntryOut(CamelModel):
    party_name: str
    people: int
    order_id: str
    enqueued_at: datetime
    items: list[LineItemOut]
    note: str
    total_amount: float


class KitchenBoard(CamelModel):
    orders: list[OrderOut]
    waiting: list[QueueEntryOut]
