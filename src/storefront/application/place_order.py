"""Application service: Place Order use case.

Thin wrapper over the placement coordinator: runs the placement and turns
its terminal outcome into either a confirmation DTO or a raised error.
"""

from __future__ import annotations

from collections.abc import Sequence

from storefront.application.dto import OrderConfirmationDTO
from storefront.domain.exceptions import PlacementFailed
from storefront.domain.model.order import CartLine
from storefront.domain.service.order_placement import OrderPlacementCoordinator


class PlaceOrderHandler:

    def __init__(self, coordinator: OrderPlacementCoordinator) -> None:
        self._coordinator = coordinator

    def handle(self, user_id: str, cart_lines: Sequence[CartLine]) -> OrderConfirmationDTO:
        """Place an order for *user_id*.

        Raises EmptyCartError or ValidationError for a request rejected
        before any stock moved, and a PlacementFailed subclass when the
        placement was rolled back.
        """
        outcome = self._coordinator.place(user_id, list(cart_lines))
        if outcome.error is not None:
            raise outcome.error
        order = outcome.order
        if order is None:
            raise PlacementFailed()

        return OrderConfirmationDTO(
            order_number=order.order_number,
            total=order.total.to_plain(),
            total_items=order.total_items,
        )
