"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        *,
        price: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Update a product's catalog data.

        This does NOT affect any existing orders; they captured a
        snapshot at placement time. Stock is changed through the
        inventory store, not here.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if price is not None:
            product.update_price(Money.of(price))
        product.update_details(description=description, image_url=image_url)
        self._product_repo.save(product)
        return product
