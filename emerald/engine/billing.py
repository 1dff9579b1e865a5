"""
Floor Service — Billing calculator

All money is Decimal and every exposed amount is rounded half-up to cents:

    subtotal   = Σ price × quantity, rounded to cents
    discount   = clamped to [0, subtotal], rounded to cents
    tax_amount = (subtotal − discount) × tax_rate / 100
    total      = subtotal − discount + tax_amount
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from emerald.core.errors import OrderLocked, OrderValidationError
from emerald.models.order import LineItem, Order

CENT = Decimal("0.01")
HUNDRED = Decimal(100)


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    # str() first so floats like 0.1 keep their printed value
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    discount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal


def _apply(subtotal: Decimal, discount: Decimal, tax_rate: Decimal) -> Totals:
    # Everything downstream works from cent amounts, so recomputing from the
    # stored subtotal and discount gives the same total.
    try:
        if discount < 0:
            raise OrderValidationError("Discount must not be negative.")
        if tax_rate < 0:
            raise OrderValidationError("Tax rate must not be negative.")
        subtotal = round2(subtotal)
        discount = round2(min(discount, subtotal))
        taxable = subtotal - discount
        tax_amount = taxable * tax_rate / HUNDRED
        return Totals(
            subtotal=subtotal,
            discount=discount,
            tax_rate=tax_rate,
            tax_amount=round2(tax_amount),
            total=round2(taxable + tax_amount),
        )
    except ArithmeticError as exc:
        raise OrderValidationError(f"Order amounts are out of range: {exc!r}") from exc


def compute_totals(
    items: Iterable[LineItem],
    discount: Decimal | float | int = 0,
    tax_rate: Decimal | float | int = 0,
) -> Totals:
    try:
        subtotal = sum((item.line_total for item in items), Decimal(0))
        discount, tax_rate = to_decimal(discount), to_decimal(tax_rate)
    except ArithmeticError as exc:
        raise OrderValidationError(f"Order amounts are out of range: {exc!r}") from exc
    return _apply(subtotal, discount, tax_rate)


def revise(
    order: Order,
    discount: Decimal | float | int | None = None,
    payment_method: str | None = None,
) -> Order:
    """
    Change discount and/or payment method in place and recompute tax and
    total from the stored subtotal and tax rate. Completed orders are final.
    """
    if order.is_completed:
        raise OrderLocked(order.order_id)

    if payment_method is not None and not payment_method.strip():
        raise OrderValidationError("Payment method must not be blank.")
    totals = None
    if discount is not None:
        try:
            discount = to_decimal(discount)
        except ArithmeticError as exc:
            raise OrderValidationError(f"Invalid discount: {exc!r}") from exc
        totals = _apply(order.subtotal, discount, order.tax_rate)

    if payment_method is not None:
        order.payment_method = payment_method.strip()
    if totals is not None:
        order.discount = totals.discount
        order.tax_amount = totals.tax_amount
        order.total_amount = totals.total
    return order
