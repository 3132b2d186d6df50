"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from stock_control.application.dto import ProductDTO
from stock_control.application.show_stock import ShowStockHandler
from stock_control.domain.exceptions import DomainException
from stock_control.infrastructure.cli.common import open_service


@click.command("add-product")
@click.argument("sku")
@click.argument("name")
@click.argument("description")
@click.argument("quantity", type=click.IntRange(min=0))
@click.argument("reorder_point", type=click.IntRange(min=0))
def product_add(
    sku: str, name: str, description: str, quantity: int, reorder_point: int
) -> None:
    """Add a new product to inventory.

    Example: add-product SKU001 "Widget" "A useful widget" 100 20
    """
    service = open_service()

    try:
        product = service.add_product(sku, name, description, quantity, reorder_point)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Product added successfully:")
    click.echo(f"  ID: {product.id}")
    _echo_fields(ProductDTO.from_domain(product))


@click.command("update-product")
@click.argument("sku")
@click.option("--name", default=None, help="New product name.")
@click.option("--description", default=None, help="New description.")
@click.option(
    "--reorder-point", type=click.IntRange(min=0), default=None,
    help="New reorder point.",
)
def product_update(
    sku: str, name: str | None, description: str | None, reorder_point: int | None
) -> None:
    """Update an existing product's details.

    Example: update-product SKU001 --name "New Widget" --reorder-point 30
    """
    service = open_service()

    try:
        product = service.update_product(
            sku, name=name, description=description, reorder_point=reorder_point
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Product updated successfully:")
    _echo_fields(ProductDTO.from_domain(product))


@click.command("view-product")
@click.argument("sku")
def product_view(sku: str) -> None:
    """View details of a specific product."""
    handler = ShowStockHandler(open_service())

    try:
        dto = handler.show_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Product Details:")
    click.echo(f"  ID: {dto.id}")
    _echo_fields(dto, flag_low_stock=True)


@click.command("list-products")
def product_list() -> None:
    """List all products in inventory."""
    products = ShowStockHandler(open_service()).list_products()

    if not products:
        click.echo("No products in inventory.")
        return

    click.echo(f"Products ({len(products)} total):")
    for p in products:
        low = " [LOW]" if p.is_low_stock else ""
        click.echo(f"  {p.sku} - {p.name} (Qty: {p.quantity}{low})")


@click.command("delete-product")
@click.argument("sku")
def product_delete(sku: str) -> None:
    """Delete a product and all its transactions."""
    service = open_service()

    try:
        service.delete_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{sku}' deleted successfully.")


def _echo_fields(dto: ProductDTO, flag_low_stock: bool = False) -> None:
    """Shared formatting for displaying a product."""
    low = " [LOW STOCK]" if flag_low_stock and dto.is_low_stock else ""
    click.echo(f"  SKU: {dto.sku}")
    click.echo(f"  Name: {dto.name}")
    click.echo(f"  Description: {dto.description}")
    click.echo(f"  Quantity: {dto.quantity}{low}")
    click.echo(f"  Reorder Point: {dto.reorder_point}")
