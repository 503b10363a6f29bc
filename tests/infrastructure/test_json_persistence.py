"""Tests for the JSON-file catalog/inventory store and order ledger."""

import json
import threading

import pytest

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.order import CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_assembler import assemble
from storefront.infrastructure.persistence.json_file import JsonFile
from storefront.infrastructure.persistence.json_order_ledger import JsonOrderLedger
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@pytest.fixture
def products(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json")
    repo.save(Product(id="1", name="Widget", price=Money.of("9.99"), stock=10, image_url="img/w.png"))
    repo.save(Product(id="2", name="Gadget", price=Money.of("5.00"), stock=2))
    return repo


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        repo = JsonProductRepository(path)
        assert path.exists()
        assert repo.list_all() == []
        assert repo.next_id() == "1"

    def test_round_trips_products(self, products):
        widget = products.get_by_id("1")
        assert widget.price == Money.of("9.99")
        assert widget.stock == 10
        assert widget.image_url == "img/w.png"
        assert products.get_by_name("GADGET").id == "2"
        assert products.next_id() == "3"

    def test_save_replaces_existing(self, products):
        widget = products.get_by_id("1")
        widget.update_price(Money.of("12.00"))
        products.save(widget)
        assert len(products.list_all()) == 2
        assert products.get_by_id("1").price == Money.of("12.00")

    def test_delete(self, products):
        assert products.delete("2") is True
        assert products.delete("2") is False
        assert products.get_by_id("2") is None

    def test_adjust_stock(self, products):
        updated = products.adjust_stock("1", -3)
        assert updated.stock == 7
        assert products.get_by_id("1").stock == 7

    def test_adjust_unknown_product(self, products):
        assert products.adjust_stock("99", -1) is None

    def test_guarded_adjust_leaves_file_untouched(self, products):
        with pytest.raises(InsufficientStockError):
            products.adjust_stock("2", -3, floor=0)
        assert products.get_by_id("2").stock == 2

    def test_concurrent_adjustments_are_not_lost(self, products):
        def reserve():
            for _ in range(5):
                products.adjust_stock("1", -1)

        threads = [threading.Thread(target=reserve) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert products.get_by_id("1").stock == -10

    def test_record_field_names(self, products, tmp_path):
        raw = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert raw[0] == {
            "id": "1",
            "name": "Widget",
            "price": "9.99",
            "currency": "USD",
            "stock": 10,
            "description": "",
            "imageURL": "img/w.png",
        }


class TestJsonOrderLedger:

    def _order(self, number: str, user: str = "alice"):
        return assemble(
            user,
            [CartLine("1", 2, "9.99", name="Widget", image_url="img/w.png"), CartLine("2", 1, "5.00", name="Gadget")],
            id_factory=lambda: number,
        )

    def test_insert_and_get(self, tmp_path):
        ledger = JsonOrderLedger(tmp_path / "orders.json")
        order = self._order("o1")
        assert ledger.insert(order) == "o1"
        assert ledger.get("o1") == order
        assert ledger.get("o2") is None

    def test_find_by_user(self, tmp_path):
        ledger = JsonOrderLedger(tmp_path / "orders.json")
        ledger.insert(self._order("o1", "alice"))
        ledger.insert(self._order("o2", "bob"))
        assert [o.order_number for o in ledger.find(user_id="bob")] == ["o2"]
        assert len(ledger.find()) == 2

    def test_duplicate_number_rejected(self, tmp_path):
        ledger = JsonOrderLedger(tmp_path / "orders.json")
        ledger.insert(self._order("o1"))
        with pytest.raises(ValidationError, match="already recorded"):
            ledger.insert(self._order("o1"))

    def test_persisted_record_shape(self, tmp_path):
        path = tmp_path / "orders.json"
        ledger = JsonOrderLedger(path)
        order = self._order("o1")
        ledger.insert(order)

        raw = json.loads(path.read_text(encoding="utf-8"))[0]
        assert raw == {
            "orderNumber": "o1",
            "userID": "alice",
            "totalItems": 3,
            "date": order.date,
            "total": "34.98",
            "items": [
                {"itemID": "1", "name": "Widget", "price": "9.99", "quantity": 2, "imageURL": "img/w.png"},
                {"itemID": "2", "name": "Gadget", "price": "5.00", "quantity": 1, "imageURL": ""},
            ],
        }


class TestJsonFile:

    def test_locked_excludes_other_threads(self, tmp_path):
        store = JsonFile(tmp_path / "items.json")
        entered = threading.Event()

        def contender():
            with store.locked():
                entered.set()

        with store.locked():
            thread = threading.Thread(target=contender)
            thread.start()
            assert not entered.wait(0.1)

        thread.join(2)
        assert entered.is_set()

    def test_persist_replaces_contents(self, tmp_path):
        store = JsonFile(tmp_path / "items.json")
        with store.locked():
            store.persist([{"id": "1"}])
        assert store.load() == [{"id": "1"}]
        assert [p.name for p in tmp_path.iterdir() if p.suffix == ".tmp"] == []
