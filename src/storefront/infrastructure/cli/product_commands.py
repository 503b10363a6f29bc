"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.remove_product import RemoveProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository
from storefront.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--image-url", default="", help="Reference to the product image.")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    price: str,
    stock: int,
    description: str,
    image_url: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = product_repository(settings).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {str(p.price):>10} {p.stock:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@click.option("--image-url", default=None, help="New image reference.")
@click.pass_obj
def product_update(
    settings: Settings,
    product_id: str,
    price: str | None,
    description: str | None,
    image_url: str | None,
) -> None:
    """Update a product's price or details."""
    handler = UpdateProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(
            product_id, price=price, description=description, image_url=image_url
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated (price {product.price})")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_remove(settings: Settings, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = RemoveProductHandler(product_repo=product_repository(settings))

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed.")
