"""
Floor Service — Order models

[TRANSACTIONAL DATA] — held in memory only, gone on restart.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from typing import Any


class OrderStatus(str, PyEnum):
    WAITING_FOR_TABLE = "waiting_for_table"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"


@dataclass
class LineItem:
    name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "price": float(self.price), "quantity": self.quantity}


@dataclass
class Order:
    """
    One customer order. Money fields are Decimal, rounded to cents.
    `people == 0` means no seating was requested (takeaway / counter).
    """
    order_id: str
    customer_name: str
    items: list[LineItem]
    people: int
    payment_method: str
    subtotal: Decimal
    discount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    note: str = ""
    table_number: int | None = None
    completed_at: datetime | None = None
    ready_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == OrderStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        return {
            "order_id": self.order_id,
            "customer_name": self.customer_name,
            "items": [i.to_dict() for i in self.items],
            "people": self.people,
            "note": self.note,
            "payment_method": self.payment_method,
            "subtotal": float(self.subtotal),
            "discount": float(self.discount),
            "tax_rate": float(self.tax_rate),
            "tax_amount": float(self.tax_amount),
            "total_amount": float(self.total_amount),
            "status": self.status.value,
            "table_number": self.table_number,
            "created_at": self.created_at.isoformat(),
            "ready_at": self.ready_at.isoformat() if self.ready_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


@dataclass
class OrderRequest:
    """Engine-level order intake, already parsed by the transport."""
    customer_name: str
    items: list[dict[str, Any]]
    people: int = 0
    note: str = ""
    payment_method: str | None = None
    discount: Decimal | float | int = 0
    tax_rate: Decimal | float | int | None = None
