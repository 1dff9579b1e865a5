"""
Floor Service — Table allocator (best fit)
"""
import logging
from datetime import datetime
from typing import Iterable

from emerald.core.errors import TableNotFound
from emerald.models.catalog import TableDefinition
from emerald.models.floor import Seating, Table

logger = logging.getLogger(__name__)


class TableAllocator:
    """
    Owns the live Table objects. Not thread-safe on its own; FloorEngine
    serialises every call under its lock.
    """

    def __init__(self, definitions: Iterable[TableDefinition]):
        self._tables: dict[int, Table] = {
            d.number: Table(number=d.number, capacity=d.capacity) for d in definitions
        }

    def __iter__(self):
        return iter(sorted(self._tables.values(), key=lambda t: t.number))

    def __len__(self) -> int:
        return len(self._tables)

    def get(self, number: int) -> Table | None:
        return self._tables.get(number)

    def table(self, number: int) -> Table:
        table = self._tables.get(number)
        if table is None:
            raise TableNotFound(number)
        return table

    def best_fit(self, party_size: int) -> Table | None:
        """Smallest free table that seats the party; lowest number wins ties."""
        candidates = [t for t in self._tables.values() if t.fits(party_size)]
        if not candidates:
            return None
        return min(candidates, key=lambda t: (t.capacity, t.number))

    def seat(self, table: Table, party_name: str, people: int, order_id: str, when: datetime) -> Table:
        if table.occupied:
            raise RuntimeError(f"Table {table.number} is already occupied by order {table.current.order_id}.")
        if people > table.capacity:
            raise RuntimeError(f"Table {table.number} seats {table.capacity}, party has {people}.")
        table.current = Seating(party_name=party_name, people=people, seated_at=when, order_id=order_id)
        logger.info("Seated %s (%d) at table %d for order %s", party_name, people, table.number, order_id)
        return table

    def allocate(self, party_size: int, party_name: str, order_id: str, when: datetime) -> Table | None:
        """
        Pick and occupy the best-fit table. None means nothing fits right now
        and the party has to wait.
        """
        if party_size <= 0:
            raise ValueError("party_size must be positive")
        table = self.best_fit(party_size)
        if table is None:
            return None
        return self.seat(table, party_name, party_size, order_id, when)

    def release(self, table: Table) -> Seating | None:
        seating, table.current = table.current, None
        return seating

    @property
    def free_count(self) -> int:
        return sum(1 for t in self._tables.values() if not t.occupied)
