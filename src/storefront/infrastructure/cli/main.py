import click

from storefront.infrastructure.cli.inventory_commands import inventory_adjust, inventory_show
from storefront.infrastructure.cli.order_commands import order_list, order_place, order_show
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_update,
)
from storefront.infrastructure.config import ConfigurationError, Settings
from storefront.infrastructure.logging_setup import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: catalog, inventory and order placement"""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Place and browse orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_show)
