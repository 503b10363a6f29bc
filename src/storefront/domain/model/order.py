"""Order aggregate and the cart lines it is built from.

An Order is created exactly once per successful placement and never
changes afterwards. Its lines are value copies of the cart at placement
time, decoupled from later Product mutations.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """A client-submitted cart line.

    ``unit_price`` is the client-echoed price snapshot and is kept raw
    until assembly; a malformed price only surfaces as an assembly error.
    """

    product_id: str
    quantity: int
    unit_price: str | Decimal | float | int
    name: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class OrderLine:
    """Captures a cart line at placement time (price lock)."""

    item_id: str
    name: str
    unit_price: Money
    quantity: Quantity
    image_url: str = ""

    @property
    def line_total(self) -> Money:
        return (self.unit_price * self.quantity.value).rounded()


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Built by ``order_assembler.assemble``; before it reaches the ledger it
    is the order draft.  ``date`` is the already formatted placement date.
    """

    order_number: str
    user_id: str
    items: tuple[OrderLine, ...]
    total_items: int
    total: Money
    date: str

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
