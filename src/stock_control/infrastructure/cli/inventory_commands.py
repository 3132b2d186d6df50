"""CLI commands for stock movements and stock-level reports."""

from __future__ import annotations

from datetime import datetime

import click

from stock_control.application.show_history import ShowHistoryHandler
from stock_control.application.show_stock import ShowStockHandler
from stock_control.domain.exceptions import DomainException
from stock_control.infrastructure.cli.common import DATETIME_FORMAT, as_utc, open_service


@click.command("add-stock")
@click.argument("sku")
@click.argument("quantity", type=click.IntRange(min=0))
@click.option("--notes", default=None, help="Free-text note stored on the transaction.")
def stock_add(sku: str, quantity: int, notes: str | None) -> None:
    """Add stock to a product.

    Example: add-stock SKU001 50 --notes "Received shipment"
    """
    service = open_service()

    try:
        service.add_stock(sku, quantity, notes)
        product = service.get_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Stock added successfully:")
    click.echo(f"  SKU: {sku}")
    click.echo(f"  Added: {quantity}")
    click.echo(f"  New Quantity: {product.quantity}")


@click.command("remove-stock")
@click.argument("sku")
@click.argument("quantity", type=click.IntRange(min=0))
@click.option("--notes", default=None, help="Free-text note stored on the transaction.")
def stock_remove(sku: str, quantity: int, notes: str | None) -> None:
    """Remove stock from a product.

    Example: remove-stock SKU001 10 --notes "Sold to customer"
    """
    service = open_service()

    try:
        service.remove_stock(sku, quantity, notes)
        product = service.get_product(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Stock removed successfully:")
    click.echo(f"  SKU: {sku}")
    click.echo(f"  Removed: {quantity}")
    click.echo(f"  New Quantity: {product.quantity}")


@click.command("low-stock")
def stock_low() -> None:
    """List products with stock at or below their reorder point."""
    products = ShowStockHandler(open_service()).list_low_stock()

    if not products:
        click.echo("No products with low stock.")
        return

    click.echo(f"Low Stock Products ({len(products)} total):")
    for p in products:
        click.echo(
            f"  {p.sku} - {p.name} (Qty: {p.quantity}, Reorder at: {p.reorder_point})"
        )


@click.command("history")
@click.argument("sku")
@click.option(
    "--start", type=click.DateTime(formats=[DATETIME_FORMAT]), default=None,
    help="Earliest timestamp to include (UTC), e.g. 2025-01-01T00:00:00.",
)
@click.option(
    "--end", type=click.DateTime(formats=[DATETIME_FORMAT]), default=None,
    help="Latest timestamp to include (UTC), e.g. 2025-12-31T23:59:59.",
)
def stock_history(sku: str, start: datetime | None, end: datetime | None) -> None:
    """View transaction history for a product."""
    handler = ShowHistoryHandler(open_service())

    try:
        history = handler.handle(sku, start=as_utc(start), end=as_utc(end))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not history.lines:
        click.echo(f"No transactions found for product '{sku}'.")
        return

    click.echo(
        f"Transaction History for '{sku}' ({len(history.lines)} transactions):"
    )
    for line in history.lines:
        notes = f" - {line.notes}" if line.notes else ""
        click.echo(f"  {line.timestamp} {line.sign} {line.quantity} {line.kind}{notes}")
