"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from stock_control.domain.service.inventory_service import InventoryService
from stock_control.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)

# Configuration knobs read by the CLI (option > environment > default).
DATA_DIR_ENV_VAR = "STOCK_CONTROL_DATA_DIR"
LOG_LEVEL_ENV_VAR = "STOCK_CONTROL_LOG_LEVEL"
DEFAULT_DATA_DIR = Path(".")
DEFAULT_LOG_LEVEL = "WARNING"


def inventory_repository(data_dir: Path = DEFAULT_DATA_DIR) -> JsonInventoryRepository:
    return JsonInventoryRepository.in_directory(data_dir)


def inventory_service(data_dir: Path = DEFAULT_DATA_DIR) -> InventoryService:
    """Build a service over the JSON files in ``data_dir`` (loads them)."""
    return InventoryService(inventory_repository(data_dir))
