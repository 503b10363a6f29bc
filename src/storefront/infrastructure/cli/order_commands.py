"""CLI commands for placing and browsing orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import CartLine
from storefront.domain.model.user import Role
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.bootstrap import (
    order_ledger,
    placement_coordinator,
    product_repository,
)
from storefront.infrastructure.config import Settings

_ROLE = click.Choice([role.value for role in Role], case_sensitive=False)


def _parse_lines(raw_lines: tuple[str, ...], products: ProductRepository) -> list[CartLine]:
    """Parse 'ID:QTY' or 'ID:QTY:PRICE' into cart lines.

    Name, image and (unless given) price are echoed from the catalog the
    way a storefront client would send them.
    """
    lines: list[CartLine] = []
    for raw in raw_lines:
        parts = [part.strip() for part in raw.split(":")]
        if len(parts) not in (2, 3) or not parts[0]:
            raise click.BadParameter(
                f"Invalid line format '{raw}'. Expected 'ProductID:Quantity[:Price]'."
            )
        product_id, qty_str = parts[0], parts[1]
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )

        product = products.get_by_id(product_id)
        if len(parts) == 3:
            price = parts[2]
        elif product is not None:
            price = str(product.price.amount)
        else:
            raise click.BadParameter(
                f"Unknown product '{product_id}'; pass its price as 'ID:QTY:PRICE'."
            )

        lines.append(
            CartLine(
                product_id=product_id,
                quantity=qty,
                unit_price=price,
                name=product.name if product else "",
                image_url=product.image_url if product else "",
            )
        )
    return lines


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_number}")
    click.echo(f"User:  {dto.user_id}")
    click.echo(f"Date:  {dto.date}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name or item.item_id:<20} {item.quantity:>5} {item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Items':<27} {dto.total_items:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="ID of the ordering user.")
@click.option(
    "--line",
    "raw_lines",
    multiple=True,
    help="Cart line as 'ProductID:Qty' or 'ProductID:Qty:Price'. Repeatable.",
)
@click.pass_obj
def order_place(settings: Settings, user_id: str, raw_lines: tuple[str, ...]) -> None:
    """Place an order (reserves stock, records the order)."""
    lines = _parse_lines(raw_lines, product_repository(settings))

    coordinator = placement_coordinator(settings)
    handler = PlaceOrderHandler(coordinator)

    try:
        confirmation = handler.handle(user_id=user_id, cart_lines=lines)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        coordinator.close()

    click.echo(f"Order {confirmation.order_number} placed")
    click.echo(f"Items: {confirmation.total_items}")
    click.echo(f"Total: {confirmation.total}")


@click.command("list")
@click.option("--user", "user_id", required=True, help="ID of the requesting user.")
@click.option("--role", default=Role.USER.value, type=_ROLE, show_default=True)
@click.pass_obj
def order_list(settings: Settings, user_id: str, role: str) -> None:
    """List orders visible to the requesting user."""
    handler = ListOrdersHandler(order_ledger(settings))
    orders = handler.handle(requester_id=user_id, requester_role=Role.parse(role))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<34} {'User':<12} {'Date':<20} {'Items':>6} {'Total':>10}")
    click.echo("-" * 86)
    for dto in orders:
        click.echo(
            f"{dto.order_number:<34} {dto.user_id:<12} {dto.date:<20} {dto.total_items:>6} {dto.total:>10}"
        )


@click.command("show")
@click.option("--number", "order_number", required=True, help="Order number to display.")
@click.option("--user", "user_id", required=True, help="ID of the requesting user.")
@click.option("--role", default=Role.USER.value, type=_ROLE, show_default=True)
@click.pass_obj
def order_show(settings: Settings, order_number: str, user_id: str, role: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_ledger(settings))

    try:
        dto = handler.handle(order_number, requester_id=user_id, requester_role=Role.parse(role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
