"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderConfirmationDTO:
    """Output: what the client gets back after a successful placement."""

    order_number: str
    total: str  # two decimals, e.g. "34.98"
    total_items: int


@dataclass(frozen=True)
class OrderLineDTO:
    item_id: str
    name: str
    price: str
    quantity: int
    image_url: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    order_number: str
    user_id: str
    items: list[OrderLineDTO]
    total_items: int
    total: str
    date: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            order_number=order.order_number,
            user_id=order.user_id,
            items=[
                OrderLineDTO(
                    item_id=item.item_id,
                    name=item.name,
                    price=item.unit_price.to_plain(),
                    quantity=item.quantity.value,
                    image_url=item.image_url,
                    line_total=item.line_total.to_plain(),
                )
                for item in order.items
            ],
            total_items=order.total_items,
            total=order.total.to_plain(),
            date=order.date,
        )


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    stock: int
