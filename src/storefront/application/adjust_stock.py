"""Application service: Adjust Stock use case (admin restock / write-off)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.inventory_store import InventoryStore


class AdjustStockHandler:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory

    def handle(self, product_id: str, delta: int) -> Product:
        """Move a product's stock by *delta*; write-offs may not go below zero."""
        floor = 0 if delta < 0 else None
        product = self._inventory.adjust_stock(product_id, delta, floor=floor)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
