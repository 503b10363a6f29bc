"""Application service: List Orders use case (query).

Admins see the whole ledger; everyone else only sees their own orders.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.model.user import Requester, Role
from storefront.domain.repository.order_ledger import OrderLedger


class ListOrdersHandler:

    def __init__(self, order_ledger: OrderLedger) -> None:
        self._order_ledger = order_ledger

    def handle(self, requester_id: str, requester_role: Role) -> list[OrderDTO]:
        requester = Requester(user_id=requester_id, role=requester_role)
        if requester.is_admin:
            orders = self._order_ledger.find()
        else:
            orders = self._order_ledger.find(user_id=requester.user_id)
        return [OrderDTO.from_order(order) for order in orders]
