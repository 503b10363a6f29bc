"""JSON-file-backed implementation of OrderLedger.

Records use the field names downstream consumers already read:
orderNumber, userID, totalItems, date, total and items[].
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_ledger import OrderLedger
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderLedger(OrderLedger):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderLedger interface ------------------------------------------------

    def insert(self, order: Order) -> str:
        with self._file.locked():
            records = self._file.load()
            if any(raw["orderNumber"] == order.order_number for raw in records):
                raise ValidationError(f"Order {order.order_number} already recorded")
            records.append(self._to_raw(order))
            self._file.persist(records)
        return order.order_number

    def get(self, order_number: str) -> Order | None:
        for raw in self._file.load():
            if raw["orderNumber"] == order_number:
                return self._to_domain(raw)
        return None

    def find(self, user_id: str | None = None) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if user_id is None or raw["userID"] == user_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "orderNumber": order.order_number,
            "userID": order.user_id,
            "totalItems": order.total_items,
            "date": order.date,
            "total": order.total.to_plain(),
            "items": [
                {
                    "itemID": item.item_id,
                    "name": item.name,
                    "price": str(item.unit_price.amount),
                    "quantity": item.quantity.value,
                    "imageURL": item.image_url,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderLine(
                item_id=i["itemID"],
                name=i["name"],
                unit_price=Money(Decimal(str(i["price"]))),
                quantity=Quantity(i["quantity"]),
                image_url=i.get("imageURL", ""),
            )
            for i in raw["items"]
        )
        return Order(
            order_number=raw["orderNumber"],
            user_id=raw["userID"],
            items=items,
            total_items=raw["totalItems"],
            total=Money(Decimal(str(raw["total"]))),
            date=raw["date"],
        )
