"""Domain service: Order Assembler.

Pure computation, no I/O. Turns a cart into a fully priced order draft:
per-line subtotals, item count, surcharged total and a human-readable
date stamp.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import EmptyCartError, ValidationError
from storefront.domain.model.order import CartLine, Order, OrderLine
from storefront.domain.model.value_objects import Money, Quantity, round2

FLAT_SURCHARGE = Money(Decimal("10.00"))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_order_number() -> str:
    return uuid.uuid4().hex


def format_order_date(moment: datetime) -> str:
    """Render *moment* as ``"<MonthName> <Day>, <Year>"``."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def assemble(
    user_id: str,
    cart_lines: Sequence[CartLine],
    *,
    surcharge: Money = FLAT_SURCHARGE,
    clock: Callable[[], datetime] = utc_now,
    id_factory: Callable[[], str] = new_order_number,
) -> Order:
    """Build an order draft from *cart_lines*.

    Raises EmptyCartError for an empty cart and ValidationError for a
    malformed line. Either a complete Order comes back or nothing does.
    """
    if not cart_lines:
        raise EmptyCartError()

    items = tuple(_to_order_line(line) for line in cart_lines)

    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + item.line_total

    return Order(
        order_number=id_factory(),
        user_id=user_id,
        items=items,
        total_items=sum(item.quantity.value for item in items),
        total=Money(round2(subtotal.amount + surcharge.amount), subtotal.currency),
        date=format_order_date(clock()),
    )


def _to_order_line(line: CartLine) -> OrderLine:
    if not line.product_id or not str(line.product_id).strip():
        raise ValidationError("Cart line is missing a product ID")
    return OrderLine(
        item_id=line.product_id,
        name=line.name,
        unit_price=Money.of(line.unit_price),
        quantity=Quantity(line.quantity),
        image_url=line.image_url,
    )
