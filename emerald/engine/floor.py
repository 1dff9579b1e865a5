"""
Floor Service — Floor engine

Single owner of tables, ledger, waiting queue and the order id counter.
Every operation that reads or writes that state runs under one lock, so a
caller never sees a table freed but still linked to its old order, or a
party seated without its order being promoted.

Lifecycle: waiting_for_table → preparing → ready → completed
(orders without a seating request start at preparing).
"""
import copy
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Iterable

from emerald.core.errors import (
    InvalidTransition,
    OrderNotFound,
    OrderValidationError,
)
from emerald.engine import billing
from emerald.engine.allocator import TableAllocator
from emerald.engine.ledger import OrderIdGenerator, OrderLedger
from emerald.engine.waitlist import WaitingQueue
from emerald.models.catalog import Catalog
from emerald.models.floor import QueueEntry, Table
from emerald.models.order import LineItem, Order, OrderRequest, OrderStatus

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderPlacement:
    order: Order
    queue_position: int | None = None


@dataclass
class CheckoutResult:
    """
    Outcome of freeing a table or finalizing a bill. `released` is False when
    the table was already free; `reassigned` is the queued order that just
    took the freed table, if any.
    """
    table_number: int | None
    released: bool
    completed: Order | None = None
    reassigned: Order | None = None


@dataclass
class TableView:
    table: Table
    order: Order | None = None


@dataclass
class Dashboard:
    tables: list[TableView]
    queue: list[QueueEntry]
    active_orders: list[Order]
    completed_count: int
    revenue: Decimal


@dataclass
class FloorStats:
    total_orders: int
    active_orders: int
    completed_orders: int
    by_status: dict[str, int] = field(default_factory=dict)
    queue_length: int = 0
    occupied_tables: int = 0
    free_tables: int = 0
    revenue: Decimal = Decimal("0.00")
    average_ticket: Decimal = Decimal("0.00")


class FloorEngine:
    def __init__(
        self,
        catalog: Catalog,
        *,
        id_prefix: str = "ORD",
        id_width: int = 4,
        default_tax_rate: Decimal | float | int = 5,
        default_payment_method: str = "cash",
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.catalog = catalog
        self.default_tax_rate = billing.to_decimal(default_tax_rate)
        self.default_payment_method = default_payment_method
        self._clock = clock
        self._lock = threading.RLock()
        self._tables = TableAllocator(catalog.tables)
        self._queue = WaitingQueue()
        self._ledger = OrderLedger()
        self._next_id = OrderIdGenerator(prefix=id_prefix, width=id_width)

    @classmethod
    def from_settings(cls, catalog: Catalog, settings: Any) -> "FloorEngine":
        return cls(
            catalog,
            id_prefix=settings.ORDER_ID_PREFIX,
            id_width=settings.ORDER_ID_WIDTH,
            default_tax_rate=settings.DEFAULT_TAX_RATE,
            default_payment_method=settings.DEFAULT_PAYMENT_METHOD,
        )

    # ── Intake ────────────────────────────────────────────────────────────────

    def _build_items(self, raw_items: Iterable[dict[str, Any]]) -> list[LineItem]:
        items: list[LineItem] = []
        for raw in raw_items:
            name = str(raw.get("name") or "").strip()
            if not name:
                raise OrderValidationError("Every item needs a name.")
            quantity = raw.get("quantity", raw.get("qty", 1))
            # Whole units only; 1.5 or "2" is rejected rather than coerced
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                raise OrderValidationError(f"Item '{name}' must have a whole-number quantity.")
            if quantity <= 0:
                raise OrderValidationError(f"Item '{name}' must have a quantity above zero.")

            price = raw.get("price")
            if price is None:
                menu_item = self.catalog.menu_item(name)
                if menu_item is None:
                    raise OrderValidationError(f"Item '{name}' is not on the menu and has no price.")
                price = menu_item.price
            try:
                price = billing.to_decimal(price)
            except ArithmeticError:
                raise OrderValidationError(f"Item '{name}' has an invalid price.")
            if not price.is_finite():
                raise OrderValidationError(f"Item '{name}' has an invalid price.")
            if price < 0:
                raise OrderValidationError(f"Item '{name}' must not have a negative price.")
            items.append(LineItem(name=name, price=price, quantity=quantity))

        if not items:
            raise OrderValidationError("An order needs at least one item.")
        return items

    def create_order(self, request: OrderRequest) -> OrderPlacement:
        """
        Price the order, then try to seat the party. A party that does not fit
        anywhere right now is queued and its order waits for a table.
        """
        name = (request.customer_name or "").strip()
        if not name:
            raise OrderValidationError("Customer name is required.")
        items = self._build_items(request.items)

        people = int(request.people or 0)
        if people < 0:
            raise OrderValidationError("Party size must not be negative.")
        if people > self.catalog.max_capacity:
            raise OrderValidationError(
                f"No table seats a party of {people}; the largest table seats {self.catalog.max_capacity}."
            )

        tax_rate = self.default_tax_rate if request.tax_rate is None else request.tax_rate
        totals = billing.compute_totals(items, request.discount or 0, tax_rate)
        payment_method = (request.payment_method or "").strip() or self.default_payment_method

        with self._lock:
            now = self._clock()
            order = Order(
                order_id=self._next_id(),
                customer_name=name,
                items=items,
                people=people,
                note=request.note or "",
                payment_method=payment_method,
                subtotal=totals.subtotal,
                discount=totals.discount,
                tax_rate=totals.tax_rate,
                tax_amount=totals.tax_amount,
                total_amount=totals.total,
                status=OrderStatus.PREPARING,
                created_at=now,
            )
            position = None
            if people > 0:
                table = self._tables.allocate(people, name, order.order_id, now)
                if table is not None:
                    order.table_number = table.number
                else:
                    order.status = OrderStatus.WAITING_FOR_TABLE
                    position = self._queue.enqueue(QueueEntry(
                        party_name=name,
                        people=people,
                        order_id=order.order_id,
                        enqueued_at=now,
                        items=copy.deepcopy(items),
                        note=order.note,
                        total_amount=order.total_amount,
                    ))
                    logger.info("No table for %s (%d), queued at position %d as %s",
                                name, people, position, order.order_id)
            self._ledger.add(order)
            return OrderPlacement(order=copy.deepcopy(order), queue_position=position)

    # ── Kitchen ───────────────────────────────────────────────────────────────

    def _lookup(self, order_id: str) -> Order:
        order = self._ledger.get(order_id)
        if order is not None:
            return order
        archived = self._ledger.archived(order_id)
        if archived is not None:
            return archived
        raise OrderNotFound(order_id)

    def mark_ready(self, order_id: str) -> Order:
        with self._lock:
            order = self._lookup(order_id)
            if order.status != OrderStatus.PREPARING:
                raise InvalidTransition(order_id, order.status.value, OrderStatus.READY.value)
            order.status = OrderStatus.READY
            order.ready_at = self._clock()
            logger.info("Order %s ready", order_id)
            return copy.deepcopy(order)

    # ── Checkout & reassignment ───────────────────────────────────────────────

    def _complete(self, order: Order) -> None:
        order.status = OrderStatus.COMPLETED
        order.completed_at = self._clock()
        self._ledger.archive(order)
        logger.info("Order %s completed, total %s", order.order_id, order.total_amount)

    def has_table(self, table_number: int) -> bool:
        return self._tables.get(table_number) is not None

    def free_table(self, table_number: int) -> CheckoutResult:
        """
        Complete the order at the table, clear it, and hand it to the first
        queued party that fits. At most one party is seated per call.
        """
        with self._lock:
            table = self._tables.get(table_number)
            if table is None or not table.occupied:
                return CheckoutResult(table_number=table_number, released=False)

            completed = None
            order = self._ledger.get(table.current.order_id)
            if order is not None:
                self._complete(order)
                completed = copy.deepcopy(order)
            self._tables.release(table)

            reassigned = None
            entry = self._queue.find_eligible(table.capacity)
            if entry is not None:
                self._queue.remove(entry)
                self._tables.seat(table, entry.party_name, entry.people, entry.order_id, self._clock())
                waiting = self._ledger.get(entry.order_id)
                if waiting is not None:
                    waiting.status = OrderStatus.PREPARING
                    waiting.table_number = table.number
                    reassigned = copy.deepcopy(waiting)
                logger.info("Table %d reassigned to queued order %s", table.number, entry.order_id)
            else:
                logger.info("Table %d is free", table.number)

            return CheckoutResult(
                table_number=table.number,
                released=True,
                completed=completed,
                reassigned=reassigned,
            )

    def complete_order(self, order_id: str) -> CheckoutResult:
        """
        Finalize the bill for an order. Seated orders go through free_table so
        their table is released and reassigned in the same step.
        """
        with self._lock:
            order = self._lookup(order_id)
            if order.status in (OrderStatus.COMPLETED, OrderStatus.WAITING_FOR_TABLE):
                raise InvalidTransition(order_id, order.status.value, OrderStatus.COMPLETED.value)
            if order.table_number is not None:
                return self.free_table(order.table_number)
            self._complete(order)
            return CheckoutResult(table_number=None, released=False, completed=copy.deepcopy(order))

    # ── Billing ───────────────────────────────────────────────────────────────

    def revise_order(
        self,
        order_id: str,
        discount: Decimal | float | int | None = None,
        payment_method: str | None = None,
    ) -> Order:
        with self._lock:
            order = self._lookup(order_id)
            billing.revise(order, discount=discount, payment_method=payment_method)
            if order.status == OrderStatus.WAITING_FOR_TABLE:
                for entry in self._queue:
                    if entry.order_id == order_id:
                        entry.total_amount = order.total_amount
            return copy.deepcopy(order)

    def get_bill(self, order_id: str) -> Order:
        with self._lock:
            order = self._ledger.find(order_id)
            if order is None:
                raise OrderNotFound(order_id)
            return copy.deepcopy(order)

    # ── Views ─────────────────────────────────────────────────────────────────

    def list_orders(self, statuses: Iterable[OrderStatus] | None = None) -> list[Order]:
        """Active orders, optionally filtered. Completed ones only when asked for."""
        with self._lock:
            wanted = None if statuses is None else set(statuses)
            orders = self._ledger.filter(wanted)
            if wanted is not None and OrderStatus.COMPLETED in wanted:
                orders.extend(self._ledger.completed)
            return copy.deepcopy(orders)

    def kitchen_view(self) -> tuple[list[Order], list[QueueEntry]]:
        with self._lock:
            cooking = self._ledger.filter((OrderStatus.PREPARING, OrderStatus.READY))
            return copy.deepcopy(cooking), copy.deepcopy(self._queue.snapshot())

    def tables(self) -> list[Table]:
        with self._lock:
            return copy.deepcopy(list(self._tables))

    def table(self, table_number: int) -> Table:
        with self._lock:
            return copy.deepcopy(self._tables.table(table_number))

    def queue(self) -> list[QueueEntry]:
        with self._lock:
            return copy.deepcopy(self._queue.snapshot())

    def dashboard(self) -> Dashboard:
        with self._lock:
            views = []
            for table in self._tables:
                order = self._ledger.get(table.current.order_id) if table.occupied else None
                views.append(TableView(table=copy.deepcopy(table), order=copy.deepcopy(order)))
            return Dashboard(
                tables=views,
                queue=copy.deepcopy(self._queue.snapshot()),
                active_orders=copy.deepcopy(self._ledger.filter()),
                completed_count=self._ledger.completed_count,
                revenue=self._ledger.revenue,
            )

    def stats(self) -> FloorStats:
        with self._lock:
            by_status = {s.value: 0 for s in OrderStatus}
            for order in self._ledger:
                by_status[order.status.value] += 1
            completed = self._ledger.completed_count
            by_status[OrderStatus.COMPLETED.value] = completed
            revenue = self._ledger.revenue
            average = billing.round2(revenue / completed) if completed else Decimal("0.00")
            return FloorStats(
                total_orders=len(self._ledger) + completed,
                active_orders=len(self._ledger),
                completed_orders=completed,
                by_status=by_status,
                queue_length=len(self._queue),
                occupied_tables=len(self._tables) - self._tables.free_count,
                free_tables=self._tables.free_count,
                revenue=revenue,
                average_ticket=average,
            )
