"""
Floor Service — Order ledger

Active orders live in an insertion-ordered dict; completed ones move to the
archive exactly once, which is what revenue is summed over.
"""
import itertools
from decimal import Decimal
from typing import Iterable, Iterator

from emerald.models.order import Order, OrderStatus


class OrderIdGenerator:
    """Produces ORD-0001, ORD-0002, ... for the lifetime of the process."""

    def __init__(self, prefix: str = "ORD", width: int = 4, start: int = 1):
        self.prefix = prefix
        self.width = width
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter):0{self.width}d}"


class OrderLedger:
    def __init__(self) -> None:
        self._active: dict[str, Order] = {}
        self._archive: dict[str, Order] = {}

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self) -> Iterator[Order]:
        return iter(self._active.values())

    def add(self, order: Order) -> None:
        if order.order_id in self._active or order.order_id in self._archive:
            raise KeyError(f"Order id '{order.order_id}' already recorded.")
        self._active[order.order_id] = order

    def get(self, order_id: str) -> Order | None:
        return self._active.get(order_id)

    def archived(self, order_id: str) -> Order | None:
        return self._archive.get(order_id)

    def find(self, order_id: str) -> Order | None:
        """Active view first, then the archive."""
        return self._active.get(order_id) or self._archive.get(order_id)

    def filter(self, statuses: Iterable[OrderStatus] | None = None) -> list[Order]:
        if statuses is None:
            return list(self._active.values())
        wanted = set(statuses)
        return [o for o in self._active.values() if o.status in wanted]

    def archive(self, order: Order) -> bool:
        """Move a completed order out of the active view. False if already archived."""
        if order.order_id in self._archive:
            return False
        self._active.pop(order.order_id, None)
        self._archive[order.order_id] = order
        return True

    @property
    def completed(self) -> list[Order]:
        return list(self._archive.values())

    @property
    def completed_count(self) -> int:
        return len(self._archive)

    @property
    def revenue(self) -> Decimal:
        return sum((o.total_amount for o in self._archive.values()), Decimal("0.00"))
