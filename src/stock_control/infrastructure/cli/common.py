"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from stock_control.domain.exceptions import DomainException
from stock_control.domain.service.inventory_service import InventoryService
from stock_control.infrastructure.bootstrap import DEFAULT_DATA_DIR, inventory_service

DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def open_service() -> InventoryService:
    """Load the service from the data directory chosen on the root group."""
    ctx = click.get_current_context()
    settings = ctx.find_object(dict) or {}
    data_dir = settings.get("data_dir", DEFAULT_DATA_DIR)

    try:
        return inventory_service(data_dir)
    except DomainException as exc:
        raise click.ClickException(f"Failed to initialize inventory service: {exc}")


def as_utc(moment: datetime | None) -> datetime | None:
    """click.DateTime yields naive datetimes; command-line times are UTC."""
    if moment is None:
        return None
    return moment.replace(tzinfo=timezone.utc)
