"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from storefront.application.dto import InventoryLineDTO
from storefront.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        return [
            InventoryLineDTO(
                product_id=product.id,
                product_name=product.name,
                stock=product.stock,
            )
            for product in self._product_repo.list_all()
        ]
