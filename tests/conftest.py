"""
Shared fixtures: a small fixed floor plan, a frozen clock and a recording
stand-in for the external sync endpoint.
"""
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from emerald.api.deps import get_engine, get_sync
from emerald.engine.floor import FloorEngine
from emerald.main import app
from emerald.models.catalog import build_catalog
from emerald.models.order import OrderRequest

# ─── Floor plan ────────────────────────────────────────────────────────────────
#   table 1: 2 seats   table 2: 4 seats   table 3: 4 seats   table 4: 6 seats
FLOOR = {
    "tables": [
        {"number": 3, "capacity": 4},
        {"number": 1, "capacity": 2},
        {"number": 4, "capacity": 6},
        {"number": 2, "capacity": 4},
    ],
    "menu": [
        {"name": "Pasta", "price": "10.00", "category": "mains"},
        {"name": "Soup", "price": "5.00", "category": "starters"},
        {"name": "Cola", "price": "2.50", "category": "drinks"},
    ],
}


class StepClock:
    """Each call is one second after the previous one."""

    def __init__(self):
        self.now = datetime(2026, 10, 17, 18, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class RecordingSync:
    def __init__(self):
        self.url = ""
        self.events: list[tuple[str, dict]] = []

    @property
    def enabled(self) -> bool:
        return False

    async def push(self, event: str, order: dict) -> bool:
        self.events.append((event, order))
        return True

    async def close(self) -> None:
        pass


@pytest.fixture
def catalog():
    return build_catalog(FLOOR)


@pytest.fixture
def engine(catalog):
    return FloorEngine(catalog, default_tax_rate=5, clock=StepClock())


@pytest.fixture
def place(engine):
    """Shortcut: place(name, people) → OrderPlacement for one 10.00 pasta."""
    def _place(name: str, people: int = 0, **kwargs):
        items = kwargs.pop("items", [{"name": "Pasta", "price": 10, "quantity": 1}])
        return engine.create_order(OrderRequest(customer_name=name, items=items, people=people, **kwargs))
    return _place


@pytest.fixture
def recorder():
    return RecordingSync()


@pytest_asyncio.fixture
async def client(engine, recorder):
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_sync] = lambda: recorder
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
