"""
Best-fit table allocation.
"""
from datetime import datetime, timezone

import pytest

from emerald.engine.allocator import TableAllocator
from emerald.models.catalog import TableDefinition

NOW = datetime(2026, 10, 17, 19, 0, tzinfo=timezone.utc)


@pytest.fixture
def allocator(catalog):
    return TableAllocator(catalog.tables)


def test_picks_smallest_table_that_fits(allocator):
    table = allocator.allocate(3, "Ada", "ORD-0001", NOW)
    assert table.capacity == 4
    assert table.number == 2  # tie between tables 2 and 3 → lowest number


def test_pair_gets_the_two_seater(allocator):
    assert allocator.allocate(2, "Ada", "ORD-0001", NOW).number == 1


def test_never_picks_a_table_smaller_than_the_party():
    for size in range(1, 7):
        fresh = TableAllocator([TableDefinition(1, 2), TableDefinition(2, 4), TableDefinition(3, 6)])
        table = fresh.allocate(size, "P", f"ORD-{size}", NOW)
        assert table.capacity >= size
        assert table.capacity == min(c for c in (2, 4, 6) if c >= size)


def test_returns_none_when_nothing_fits(allocator):
    allocator.allocate(6, "Big", "ORD-0001", NOW)
    assert allocator.allocate(5, "Also big", "ORD-0002", NOW) is None


def test_skips_occupied_tables(allocator):
    first = allocator.allocate(2, "Ada", "ORD-0001", NOW)
    second = allocator.allocate(2, "Bob", "ORD-0002", NOW)
    assert first.number == 1
    assert second.number == 2


def test_occupancy_record_matches_flag(allocator):
    table = allocator.allocate(2, "Ada", "ORD-0001", NOW)
    assert table.occupied
    assert table.current.order_id == "ORD-0001"
    assert table.current.people == 2
    assert table.current.seated_at == NOW

    seating = allocator.release(table)
    assert seating.party_name == "Ada"
    assert not table.occupied
    assert table.current is None


def test_seating_an_occupied_table_is_refused(allocator):
    table = allocator.allocate(2, "Ada", "ORD-0001", NOW)
    with pytest.raises(RuntimeError):
        allocator.seat(table, "Bob", 1, "ORD-0002", NOW)


def test_party_size_must_be_positive(allocator):
    with pytest.raises(ValueError):
        allocator.allocate(0, "Nobody", "ORD-0001", NOW)
