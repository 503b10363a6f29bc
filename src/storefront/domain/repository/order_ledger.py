"""Abstract, append-only ledger of placed orders."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderLedger(ABC):

    @abstractmethod
    def insert(self, order: Order) -> str:
        """Append an order and return its order number."""

    @abstractmethod
    def get(self, order_number: str) -> Order | None:
        """Return an order by its number, or None if not found."""

    @abstractmethod
    def find(self, user_id: str | None = None) -> list[Order]:
        """Return the orders owned by *user_id*, or every order if None."""
