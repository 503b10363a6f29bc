"""JSON-file-backed catalog: ProductRepository and InventoryStore in one.

Products and their stock counters live in the same document, so the
inventory store is just the catalog's atomic stock update.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.inventory_store import InventoryStore
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository, InventoryStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        ids = [int(raw["id"]) for raw in self._file.load() if str(raw["id"]).isdigit()]
        return str(max(ids) + 1) if ids else "1"

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.locked():
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    break
            else:
                records.append(self._to_raw(product))
            self._file.persist(records)

    def delete(self, product_id: str) -> bool:
        with self._file.locked():
            records = self._file.load()
            kept = [raw for raw in records if raw["id"] != product_id]
            if len(kept) == len(records):
                return False
            self._file.persist(kept)
            return True

    # --- InventoryStore interface ---------------------------------------------

    def adjust_stock(
        self,
        product_id: str,
        delta: int,
        *,
        floor: int | None = None,
    ) -> Product | None:
        with self._file.locked():
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] == product_id:
                    product = self._to_domain(raw)
                    product.apply_stock_delta(delta, floor=floor)
                    records[i] = self._to_raw(product)
                    self._file.persist(records)
                    return product
            return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "description": product.description,
            "imageURL": product.image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw.get("stock", 0),
            description=raw.get("description", ""),
            image_url=raw.get("imageURL", ""),
        )
