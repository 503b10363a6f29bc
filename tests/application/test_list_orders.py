"""Tests for the order query use cases (list and show)."""

import pytest

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import CartLine
from storefront.domain.model.user import Role
from storefront.domain.service.order_assembler import assemble
from tests.fakes import FakeOrderLedger


def _ledger() -> FakeOrderLedger:
    ledger = FakeOrderLedger()
    for number, user in [("o1", "alice"), ("o2", "bob"), ("o3", "alice")]:
        ledger.insert(
            assemble(user, [CartLine("P1", 1, "4.00", name="Widget")], id_factory=lambda n=number: n)
        )
    return ledger


class TestListOrders:

    def test_user_sees_only_own_orders(self):
        orders = ListOrdersHandler(_ledger()).handle("alice", Role.USER)
        assert sorted(o.order_number for o in orders) == ["o1", "o3"]
        assert all(o.user_id == "alice" for o in orders)

    def test_admin_sees_everything(self):
        orders = ListOrdersHandler(_ledger()).handle("root", Role.ADMIN)
        assert sorted(o.order_number for o in orders) == ["o1", "o2", "o3"]

    def test_user_without_orders(self):
        assert ListOrdersHandler(_ledger()).handle("carol", Role.USER) == []

    def test_dto_shape(self):
        dto = ListOrdersHandler(_ledger()).handle("bob", Role.USER)[0]
        assert dto.total == "14.00"
        assert dto.total_items == 1
        assert dto.items[0].item_id == "P1"
        assert dto.items[0].price == "4.00"
        assert dto.items[0].line_total == "4.00"


class TestShowOrder:

    def test_owner_can_view(self):
        dto = ShowOrderHandler(_ledger()).handle("o2", "bob", Role.USER)
        assert dto.order_number == "o2"

    def test_admin_can_view_any(self):
        dto = ShowOrderHandler(_ledger()).handle("o2", "root", Role.ADMIN)
        assert dto.user_id == "bob"

    def test_other_users_order_is_hidden(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(_ledger()).handle("o2", "alice", Role.USER)

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(_ledger()).handle("nope", "root", Role.ADMIN)


class TestRole:

    @pytest.mark.parametrize("raw, role", [("Admin", Role.ADMIN), ("user", Role.USER), (" ADMIN ", Role.ADMIN)])
    def test_parse(self, raw, role):
        assert Role.parse(raw) is role

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Unknown role"):
            Role.parse("superuser")
