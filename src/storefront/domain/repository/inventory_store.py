"""Abstract store for live per-product stock counters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class InventoryStore(ABC):

    @abstractmethod
    def adjust_stock(
        self,
        product_id: str,
        delta: int,
        *,
        floor: int | None = None,
    ) -> Product | None:
        """Atomically add *delta* to a product's stock.

        Negative deltas reserve, positive deltas restock. Returns the
        updated product, or None when no product has that ID. With a
        *floor*, raises InsufficientStockError instead of letting stock
        drop below it.
        """
