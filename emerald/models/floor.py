"""
Floor Service — Table and waiting-queue models
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from emerald.models.order import LineItem


@dataclass
class Seating:
    """Who currently sits at a table and which order they are eating."""
    party_name: str
    people: int
    seated_at: datetime
    order_id: str


@dataclass
class Table:
    """
    A physical table. `occupied` is derived from `current`, so a table can
    never be flagged occupied without an occupancy record or vice versa.
    """
    number: int
    capacity: int
    current: Seating | None = None

    @property
    def occupied(self) -> bool:
        return self.current is not None

    def fits(self, party_size: int) -> bool:
        return not self.occupied and self.capacity >= party_size


@dataclass
class QueueEntry:
    """
    A party waiting for a table. Carries enough of the order to show it on
    the kitchen board while the party waits.
    """
    party_name: str
    people: int
    order_id: str
    enqueued_at: datetime
    items: list[LineItem] = field(default_factory=list)
    note: str = ""
    total_amount: Decimal = Decimal("0.00")
