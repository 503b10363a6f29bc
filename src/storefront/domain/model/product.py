"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are added and removed from the
catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is the live counter owned by the inventory store. It is
    expected to stay >= 0 but concurrent unguarded decrements can push it
    below zero, so it is not validated here.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str = ""
    image_url: str = ""

    @staticmethod
    def create(
        id: str,
        name: str,
        price: Money,
        stock: int = 0,
        description: str = "",
        image_url: str = "",
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(stock, int) or stock < 0:
            raise ValidationError("Initial stock must be a non-negative integer")
        return Product(
            id=id,
            name=name.strip(),
            price=price,
            stock=stock,
            description=description.strip(),
            image_url=image_url.strip(),
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at placement time.
        """
        self.price = new_price

    def update_details(
        self,
        description: str | None = None,
        image_url: str | None = None,
    ) -> None:
        if description is not None:
            self.description = description.strip()
        if image_url is not None:
            self.image_url = image_url.strip()

    def apply_stock_delta(self, delta: int, floor: int | None = None) -> None:
        """Move the stock counter by *delta*.

        With a *floor*, refuses any change that would leave stock below it.
        """
        if not isinstance(delta, int) or isinstance(delta, bool) or delta == 0:
            raise ValidationError("Stock adjustment must be a non-zero integer")
        if floor is not None and self.stock + delta < floor:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {-delta}, have {self.stock} in stock)"
            )
        self.stock += delta
