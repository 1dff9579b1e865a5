"""
Floor Service — Menu and table catalog

[REFERENCE DATA] — loaded once at startup, read-only afterwards.
"""
import json
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from emerald.core.errors import CatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableDefinition:
    number: int
    capacity: int


@dataclass(frozen=True)
class MenuItem:
    name: str
    price: Decimal
    category: str = "mains"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "price": float(self.price), "category": self.category}


@dataclass(frozen=True)
class Catalog:
    tables: tuple[TableDefinition, ...]
    menu: tuple[MenuItem, ...]

    @property
    def max_capacity(self) -> int:
        return max((t.capacity for t in self.tables), default=0)

    def menu_item(self, name: str) -> MenuItem | None:
        key = name.strip().casefold()
        for item in self.menu:
            if item.name.casefold() == key:
                return item
        return None


DEFAULT_CATALOG: dict[str, list[dict[str, Any]]] = {
    "tables": [
        {"number": 1, "capacity": 2},
        {"number": 2, "capacity": 2},
        {"number": 3, "capacity": 4},
        {"number": 4, "capacity": 4},
        {"number": 5, "capacity": 6},
        {"number": 6, "capacity": 8},
    ],
    "menu": [
        {"name": "Garlic Bread", "price": "4.50", "category": "starters"},
        {"name": "Tomato Soup", "price": "5.00", "category": "starters"},
        {"name": "Caesar Salad", "price": "7.50", "category": "starters"},
        {"name": "Margherita Pizza", "price": "10.00", "category": "mains"},
        {"name": "Grilled Salmon", "price": "16.00", "category": "mains"},
        {"name": "Mushroom Risotto", "price": "12.50", "category": "mains"},
        {"name": "Emerald Burger", "price": "11.00", "category": "mains"},
        {"name": "Tiramisu", "price": "6.00", "category": "desserts"},
        {"name": "Lemonade", "price": "3.00", "category": "drinks"},
        {"name": "Espresso", "price": "2.50", "category": "drinks"},
    ],
}


def _parse_tables(raw: list[dict[str, Any]]) -> tuple[TableDefinition, ...]:
    tables: list[TableDefinition] = []
    seen: set[int] = set()
    for entry in raw:
        try:
            number = int(entry["number"])
            capacity = int(entry["capacity"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"Invalid table definition {entry!r}: {exc}") from exc
        if capacity <= 0:
            raise CatalogError(f"Table {number} must seat at least one person.")
        if number in seen:
            raise CatalogError(f"Duplicate table number {number}.")
        seen.add(number)
        tables.append(TableDefinition(number=number, capacity=capacity))
    return tuple(sorted(tables, key=lambda t: t.number))


def _parse_menu(raw: list[dict[str, Any]]) -> tuple[MenuItem, ...]:
    items: list[MenuItem] = []
    seen: set[str] = set()
    for entry in raw:
        try:
            name = str(entry["name"]).strip()
            price = Decimal(str(entry["price"]))
        except (KeyError, InvalidOperation) as exc:
            raise CatalogError(f"Invalid menu item {entry!r}") from exc
        if not name:
            raise CatalogError("Menu item name must not be empty.")
        if price < 0:
            raise CatalogError(f"Menu item '{name}' has a negative price.")
        if name.casefold() in seen:
            raise CatalogError(f"Duplicate menu item '{name}'.")
        seen.add(name.casefold())
        items.append(MenuItem(name=name, price=price, category=str(entry.get("category", "mains"))))
    return tuple(items)


def build_catalog(data: dict[str, Any]) -> Catalog:
    if not isinstance(data, dict):
        raise CatalogError("Catalog must be a JSON object with 'tables' and 'menu'.")
    tables = _parse_tables(data.get("tables") or [])
    if not tables:
        raise CatalogError("Catalog must define at least one table.")
    return Catalog(tables=tables, menu=_parse_menu(data.get("menu") or []))


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Load the floor plan and menu from a JSON file shaped like DEFAULT_CATALOG.
    With no path, the built-in catalog is used.
    """
    if not path:
        catalog = build_catalog(DEFAULT_CATALOG)
        logger.info("Using built-in catalog: %d tables, %d menu items", len(catalog.tables), len(catalog.menu))
        return catalog

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read catalog file '{path}': {exc}") from exc

    catalog = build_catalog(data)
    logger.info("Loaded catalog from %s: %d tables, %d menu items", path, len(catalog.tables), len(catalog.menu))
    return catalog
