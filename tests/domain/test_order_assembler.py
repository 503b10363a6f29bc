"""Unit tests for the pure order assembler."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.domain.exceptions import EmptyCartError, ValidationError
from storefront.domain.model.order import CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_assembler import (
    FLAT_SURCHARGE,
    assemble,
    format_order_date,
)

FROZEN = datetime(2026, 10, 8, 15, 30, tzinfo=timezone.utc)


def _clock() -> datetime:
    return FROZEN


def _lines() -> list[CartLine]:
    return [
        CartLine("P1", 2, "9.99", name="Widget", image_url="img/p1.png"),
        CartLine("P2", 1, "5.00", name="Gadget", image_url="img/p2.png"),
    ]


class TestTotals:

    def test_surcharged_total_and_item_count(self):
        order = assemble("u1", _lines(), clock=_clock)
        assert order.total == Money.of("34.98")
        assert order.total_items == 3

    def test_total_is_subtotal_plus_surcharge(self):
        order = assemble("u1", _lines(), clock=_clock)
        assert order.total.amount == order.subtotal.amount + FLAT_SURCHARGE.amount

    def test_custom_surcharge(self):
        order = assemble("u1", _lines(), surcharge=Money.of("0"), clock=_clock)
        assert order.total.to_plain() == "24.98"

    def test_line_subtotals_are_rounded(self):
        order = assemble("u1", [CartLine("P1", 3, "0.335")], clock=_clock)
        assert order.items[0].line_total == Money(Decimal("1.01"))
        assert order.total.to_plain() == "11.01"


class TestSnapshot:

    def test_lines_copy_cart_data(self):
        order = assemble("u1", _lines(), clock=_clock)
        first = order.items[0]
        assert first.item_id == "P1"
        assert first.name == "Widget"
        assert first.unit_price == Money.of("9.99")
        assert first.quantity.value == 2
        assert first.image_url == "img/p1.png"
        assert order.user_id == "u1"

    def test_date_stamp(self):
        order = assemble("u1", _lines(), clock=_clock)
        assert order.date == "October 8, 2026"

    def test_order_number_from_factory(self):
        order = assemble("u1", _lines(), clock=_clock, id_factory=lambda: "order-1")
        assert order.order_number == "order-1"

    def test_default_order_numbers_are_unique(self):
        first = assemble("u1", _lines(), clock=_clock)
        second = assemble("u1", _lines(), clock=_clock)
        assert first.order_number != second.order_number


class TestDeterminism:

    def test_same_inputs_same_totals(self):
        first = assemble("u1", _lines(), clock=_clock)
        second = assemble("u1", _lines(), clock=_clock)
        assert first.total == second.total
        assert first.total_items == second.total_items
        assert first.items == second.items
        assert first.date == second.date


class TestRejections:

    def test_empty_cart(self):
        with pytest.raises(EmptyCartError):
            assemble("u1", [], clock=_clock)

    def test_malformed_price(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            assemble("u1", [CartLine("P1", 1, "free")], clock=_clock)

    def test_negative_price(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            assemble("u1", [CartLine("P1", 1, "-1.00")], clock=_clock)

    def test_missing_product_id(self):
        with pytest.raises(ValidationError, match="missing a product ID"):
            assemble("u1", [CartLine("", 1, "1.00")], clock=_clock)


def test_format_order_date_has_no_zero_padding():
    assert format_order_date(datetime(2024, 1, 5)) == "January 5, 2024"
