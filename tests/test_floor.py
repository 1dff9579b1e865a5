"""
Floor engine: seating, queueing, checkout/reassignment and order lifecycle.

Floor plan (conftest): table 1 seats 2, tables 2 and 3 seat 4, table 4 seats 6.
"""
import threading
from decimal import Decimal

import pytest

from emerald.core.errors import (
    InvalidTransition,
    OrderLocked,
    OrderNotFound,
    OrderValidationError,
    TableNotFound,
)
from emerald.models.order import OrderRequest, OrderStatus


def assert_floor_consistent(engine):
    """Every occupied table points at an active order that points back at it."""
    active = {o.order_id: o for o in engine.list_orders()}
    for table in engine.tables():
        assert table.occupied == (table.current is not None)
        if table.occupied:
            assert table.current.people <= table.capacity
            order = active[table.current.order_id]
            assert order.table_number == table.number
            assert order.status in (OrderStatus.PREPARING, OrderStatus.READY)
    queued = {e.order_id for e in engine.queue()}
    for order in active.values():
        assert (order.status == OrderStatus.WAITING_FOR_TABLE) == (order.order_id in queued)


def fill_floor(place):
    return [place("A", 2), place("B", 4), place("C", 4), place("D", 6)]


# ─── Intake ────────────────────────────────────────────────────────────────────
def test_party_is_seated_at_best_fit_table(place, engine):
    placement = place("Ada", 3)
    assert placement.order.table_number == 2
    assert placement.order.status == OrderStatus.PREPARING
    assert placement.queue_position is None
    assert engine.table(2).current.party_name == "Ada"
    assert_floor_consistent(engine)


def test_order_without_seating_goes_straight_to_kitchen(place, engine):
    placement = place("Counter", 0)
    assert placement.order.table_number is None
    assert placement.order.status == OrderStatus.PREPARING
    assert all(not t.occupied for t in engine.tables())


def test_party_waits_when_no_table_fits(place, engine):
    fill_floor(place)
    placement = place("Eve", 3)
    assert placement.order.status == OrderStatus.WAITING_FOR_TABLE
    assert placement.order.table_number is None
    assert placement.queue_position == 1
    assert [e.order_id for e in engine.queue()] == [placement.order.order_id]
    assert_floor_consistent(engine)


def test_totals_are_computed_at_intake(place):
    placement = place(
        "Ada",
        items=[{"name": "Pasta", "price": 10, "quantity": 2}, {"name": "Soup", "price": 5, "quantity": 1}],
    )
    order = placement.order
    assert order.subtotal == Decimal("25.00")
    assert order.tax_amount == Decimal("1.25")
    assert order.total_amount == Decimal("26.25")
    assert order.payment_method == "cash"


def test_missing_price_is_taken_from_the_menu(place):
    order = place("Ada", items=[{"name": "cola", "quantity": 2}]).order
    assert order.items[0].price == Decimal("2.50")
    assert order.subtotal == Decimal("5.00")


@pytest.mark.parametrize("name, items, people", [
    ("", [{"name": "Pasta", "price": 10, "quantity": 1}], 0),
    ("   ", [{"name": "Pasta", "price": 10, "quantity": 1}], 0),
    ("Ada", [], 0),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": 0}], 0),
    ("Ada", [{"name": "Pasta", "price": -1, "quantity": 1}], 0),
    ("Ada", [{"name": "Lobster", "quantity": 1}], 0),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": 1}], -2),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": 1}], 7),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": 1.5}], 0),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": "2"}], 0),
    ("Ada", [{"name": "Pasta", "price": 10, "quantity": True}], 0),
    ("Ada", [{"name": "Gold", "price": 1e30, "quantity": 1}], 0),
    ("Ada", [{"name": "Gold", "price": "NaN", "quantity": 1}], 0),
])
def test_invalid_requests_are_rejected_without_side_effects(engine, name, items, people):
    with pytest.raises(OrderValidationError):
        engine.create_order(OrderRequest(customer_name=name, items=items, people=people))
    assert engine.list_orders() == []
    assert engine.queue() == []
    assert engine.stats().total_orders == 0


def test_order_ids_are_never_reused(place):
    ids = [place(f"guest-{i}").order.order_id for i in range(60)]
    assert len(set(ids)) == 60
    assert ids[0] == "ORD-0001"
    assert ids[-1] == "ORD-0060"


# ─── Checkout & reassignment ───────────────────────────────────────────────────
def test_free_table_without_queue_leaves_it_free(place, engine):
    seated = place("Ada", 2).order
    result = engine.free_table(seated.table_number)

    assert result.released
    assert result.completed.order_id == seated.order_id
    assert result.completed.status == OrderStatus.COMPLETED
    assert result.completed.completed_at is not None
    assert result.reassigned is None
    assert not engine.table(1).occupied
    assert engine.queue() == []
    assert_floor_consistent(engine)


def test_freed_table_goes_to_waiting_party(place, engine):
    b = fill_floor(place)[1].order
    eve = place("Eve", 3).order

    result = engine.free_table(b.table_number)

    assert result.reassigned.order_id == eve.order_id
    assert result.reassigned.status == OrderStatus.PREPARING
    assert result.reassigned.table_number == b.table_number
    assert engine.table(b.table_number).current.order_id == eve.order_id
    assert engine.queue() == []
    assert_floor_consistent(engine)


def test_first_eligible_arrival_is_seated_and_others_keep_waiting(place, engine):
    fill_floor(place)
    big = place("Big", 6).order
    pair = place("Pair", 2).order

    result = engine.free_table(1)  # two-seater: Big cannot use it, Pair can

    assert result.reassigned.order_id == pair.order_id
    assert [e.order_id for e in engine.queue()] == [big.order_id]
    assert engine.get_bill(big.order_id).status == OrderStatus.WAITING_FOR_TABLE
    assert_floor_consistent(engine)


def test_one_free_event_seats_at_most_one_party(place, engine):
    fill_floor(place)
    first = place("P1", 2).order
    second = place("P2", 2).order

    engine.free_table(4)  # six-seater could hold both pairs

    assert engine.table(4).current.order_id == first.order_id
    assert [e.order_id for e in engine.queue()] == [second.order_id]


def test_waiting_party_is_seated_once_at_most(place, engine):
    fill_floor(place)
    eve = place("Eve", 2).order

    first = engine.free_table(2)
    second = engine.free_table(3)

    assert first.reassigned.order_id == eve.order_id
    assert second.reassigned is None
    seated_for_eve = [t for t in engine.tables() if t.occupied and t.current.order_id == eve.order_id]
    assert len(seated_for_eve) == 1


def test_free_unknown_or_free_table_is_a_noop(place, engine):
    place("Ada", 2)
    assert engine.free_table(99).released is False
    assert engine.free_table(3).released is False
    assert engine.stats().completed_orders == 0
    assert not engine.has_table(99)


# ─── Lifecycle ─────────────────────────────────────────────────────────────────
def test_mark_ready_only_from_preparing(place, engine):
    fill_floor(place)
    waiting = place("Eve", 3).order
    cooking = place("Counter", 0).order

    with pytest.raises(InvalidTransition):
        engine.mark_ready(waiting.order_id)

    ready = engine.mark_ready(cooking.order_id)
    assert ready.status == OrderStatus.READY
    assert ready.ready_at is not None

    with pytest.raises(InvalidTransition):
        engine.mark_ready(cooking.order_id)

    with pytest.raises(OrderNotFound):
        engine.mark_ready("ORD-9999")


def test_complete_takeaway_order(place, engine):
    order = place("Counter", 0).order
    result = engine.complete_order(order.order_id)
    assert result.table_number is None
    assert result.completed.status == OrderStatus.COMPLETED
    assert engine.stats().revenue == order.total_amount


def test_complete_seated_order_frees_and_reassigns(place, engine):
    a = fill_floor(place)[0].order
    pair = place("Pair", 2).order

    result = engine.complete_order(a.order_id)

    assert result.released
    assert result.table_number == 1
    assert result.reassigned.order_id == pair.order_id


def test_waiting_order_cannot_be_completed(place, engine):
    fill_floor(place)
    waiting = place("Eve", 3).order
    with pytest.raises(InvalidTransition):
        engine.complete_order(waiting.order_id)


def test_completed_orders_leave_active_views_and_count_once(place, engine):
    order = place("Ada", 2).order
    engine.mark_ready(order.order_id)
    engine.free_table(order.table_number)

    assert engine.list_orders() == []
    assert engine.list_orders([OrderStatus.PREPARING, OrderStatus.READY]) == []
    cooking, _ = engine.kitchen_view()
    assert cooking == []
    assert [o.order_id for o in engine.list_orders([OrderStatus.COMPLETED])] == [order.order_id]

    with pytest.raises(InvalidTransition):
        engine.complete_order(order.order_id)
    with pytest.raises(InvalidTransition):
        engine.mark_ready(order.order_id)

    stats = engine.stats()
    assert stats.completed_orders == 1
    assert stats.revenue == order.total_amount


# ─── Billing revisions ─────────────────────────────────────────────────────────
def test_revise_discount_and_payment_method(place, engine):
    order = place(
        "Ada",
        items=[{"name": "Pasta", "price": 10, "quantity": 2}, {"name": "Soup", "price": 5, "quantity": 1}],
    ).order
    revised = engine.revise_order(order.order_id, discount=5, payment_method="card")
    assert revised.tax_amount == Decimal("1.00")
    assert revised.total_amount == Decimal("21.00")
    assert revised.payment_method == "card"
    assert engine.get_bill(order.order_id).total_amount == Decimal("21.00")


def test_revising_a_waiting_order_updates_its_queue_entry(place, engine):
    fill_floor(place)
    eve = place("Eve", 3).order
    revised = engine.revise_order(eve.order_id, discount=1)
    assert engine.queue()[0].total_amount == revised.total_amount


def test_revising_with_the_same_discount_keeps_the_total(place, engine):
    order = place("Ada", items=[{"name": "Mint", "price": "0.006", "quantity": 1}], tax_rate=100).order
    assert order.subtotal == Decimal("0.01")
    assert order.total_amount == Decimal("0.02")

    revised = engine.revise_order(order.order_id, discount=order.discount)
    assert revised.total_amount == Decimal("0.02")


def test_completed_orders_cannot_be_revised(place, engine):
    order = place("Ada", 2).order
    engine.free_table(order.table_number)
    with pytest.raises(OrderLocked):
        engine.revise_order(order.order_id, discount=1)
    assert engine.get_bill(order.order_id).discount == Decimal("0.00")


def test_bill_lookup_for_unknown_order(engine):
    with pytest.raises(OrderNotFound):
        engine.get_bill("ORD-0404")
    with pytest.raises(TableNotFound):
        engine.table(404)


def test_snapshots_do_not_leak_engine_state(place, engine):
    order = place("Ada", 2).order
    order.status = OrderStatus.COMPLETED
    engine.tables()[0].current = None
    assert engine.get_bill(order.order_id).status == OrderStatus.PREPARING
    assert engine.table(1).occupied


# ─── Views ─────────────────────────────────────────────────────────────────────
def test_dashboard_and_stats(place, engine):
    fill_floor(place)
    eve = place("Eve", 3).order
    engine.free_table(4)

    dash = engine.dashboard()
    by_number = {v.table.number: v for v in dash.tables}
    assert by_number[4].order.order_id == eve.order_id
    assert dash.completed_count == 1
    assert dash.revenue == Decimal("10.50")
    assert dash.queue == []
    assert len(dash.active_orders) == 4

    stats = engine.stats()
    assert stats.total_orders == 5
    assert stats.active_orders == 4
    assert stats.occupied_tables == 4
    assert stats.free_tables == 0
    assert stats.by_status["completed"] == 1
    assert stats.by_status["preparing"] == 4
    assert stats.average_ticket == Decimal("10.50")


# ─── Concurrency ───────────────────────────────────────────────────────────────
def test_concurrent_intake_never_double_books(engine):
    barrier = threading.Barrier(40)
    placements = []
    lock = threading.Lock()

    def worker(i):
        barrier.wait()
        p = engine.create_order(OrderRequest(
            customer_name=f"guest-{i}", items=[{"name": "Soup", "quantity": 1}], people=2,
        ))
        with lock:
            placements.append(p)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(40)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    seated = [p.order.table_number for p in placements if p.order.table_number is not None]
    assert sorted(seated) == [1, 2, 3, 4]
    assert len(engine.queue()) == 36
    assert len({p.order.order_id for p in placements}) == 40
    assert_floor_consistent(engine)


def test_concurrent_checkouts_hand_each_table_to_a_different_party(place, engine):
    fill_floor(place)
    waiting = [place(f"w{i}", 2).order.order_id for i in range(6)]

    threads = [threading.Thread(target=engine.free_table, args=(n,)) for n in (1, 2, 3, 4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    seated = sorted(t.current.order_id for t in engine.tables())
    assert seated == sorted(waiting[:4])
    assert [e.order_id for e in engine.queue()] == waiting[4:]
    assert engine.stats().completed_orders == 4
    assert_floor_consistent(engine)
