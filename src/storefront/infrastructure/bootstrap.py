"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_placement import (
    OrderPlacementCoordinator,
    PlacementPolicy,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_order_ledger import JsonOrderLedger
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def order_ledger(settings: Settings) -> JsonOrderLedger:
    return JsonOrderLedger(settings.data_dir / "orders.json")


def placement_policy(settings: Settings) -> PlacementPolicy:
    return PlacementPolicy(
        surcharge=Money(settings.flat_surcharge),
        strict_products=settings.strict_products,
        guard_stock=settings.guard_stock,
        call_timeout=settings.call_timeout,
    )


def placement_coordinator(settings: Settings) -> OrderPlacementCoordinator:
    return OrderPlacementCoordinator(
        inventory=product_repository(settings),
        ledger=order_ledger(settings),
        policy=placement_policy(settings),
    )
