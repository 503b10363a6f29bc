"""CLI commands for stock management."""

from __future__ import annotations

import click

from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.config import Settings


@click.command("adjust")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Signed change, e.g. 5 or -2.")
@click.pass_obj
def inventory_adjust(settings: Settings, product_id: str, delta: int) -> None:
    """Restock (positive delta) or write off (negative delta) a product."""
    handler = AdjustStockHandler(inventory=product_repository(settings))

    try:
        product = handler.handle(product_id=product_id, delta=delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.name}' is now {product.stock}")


@click.command("show")
@click.pass_obj
def inventory_show(settings: Settings) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(product_repo=product_repository(settings))
    lines = handler.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Stock':>8}")
    click.echo("-" * 36)
    for line in lines:
        click.echo(f"{line.product_id:<6} {line.product_name:<20} {line.stock:>8}")
