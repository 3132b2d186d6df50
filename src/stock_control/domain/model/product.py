"""Product: a catalog entry.

Products are identified externally by their SKU. The ``id`` is assigned
once at creation and never changes; so does the SKU. Stock (``quantity``)
changes only through stock movements recorded in the ledger.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because name, description, reorder point
    and on-hand quantity are legitimate mutations. The service hands out
    copies, so callers never hold a reference into the catalog.
    """

    id: str
    sku: str
    name: str
    description: str
    quantity: int
    reorder_point: int

    @property
    def is_low_stock(self) -> bool:
        """True when on-hand stock is at or below the reorder point."""
        return self.quantity <= self.reorder_point
