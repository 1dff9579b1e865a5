"""
Floor Service — Domain exceptions

Routers translate these into HTTP errors; nothing here is fatal to the process.
A party that cannot be seated right now is not an error, it is queued.
"""


class FloorError(Exception):
    """Base class for every rejection raised by the floor engine."""


class OrderValidationError(FloorError, ValueError):
    """Malformed order request: blank name, no items, bad quantity or price."""


class OrderNotFound(FloorError, LookupError):
    def __init__(self, order_id: str):
        super().__init__(f"Order '{order_id}' not found.")
        self.order_id = order_id


class TableNotFound(FloorError, LookupError):
    def __init__(self, table_number: int):
        super().__init__(f"Table {table_number} not found.")
        self.table_number = table_number


class InvalidTransition(FloorError):
    """Raised when a status change would skip or regress the order lifecycle."""

    def __init__(self, order_id: str, current: str, target: str):
        super().__init__(f"Cannot move order '{order_id}' from status '{current}' to '{target}'.")
        self.order_id = order_id
        self.current = current
        self.target = target


class OrderLocked(FloorError):
    """Completed orders are final; their bill can no longer be revised."""

    def __init__(self, order_id: str):
        super().__init__(f"Order '{order_id}' is completed and can no longer be revised.")
        self.order_id = order_id


class CatalogError(FloorError, ValueError):
    """The menu/table definition file is unreadable or inconsistent."""
