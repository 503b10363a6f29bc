"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        description: str = "",
        image_url: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        product = Product.create(
            id=self._product_repo.next_id(),
            name=name,
            price=Money.of(price),
            stock=stock,
            description=description,
            image_url=image_url,
        )
        self._product_repo.save(product)
        return product
