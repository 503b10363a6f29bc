"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.user import Requester, Role
from storefront.domain.repository.order_ledger import OrderLedger


class ShowOrderHandler:

    def __init__(self, order_ledger: OrderLedger) -> None:
        self._order_ledger = order_ledger

    def handle(self, order_number: str, requester_id: str, requester_role: Role) -> OrderDTO:
        requester = Requester(user_id=requester_id, role=requester_role)
        order = self._order_ledger.get(order_number)
        # Someone else's order looks exactly like a missing one.
        if order is None or not (requester.is_admin or order.user_id == requester.user_id):
            raise EntityNotFoundError(f"Order {order_number} not found")
        return OrderDTO.from_order(order)
