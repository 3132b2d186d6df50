"""Transaction: one entry of the stock ledger.

Ledger entries are immutable once recorded. They are only ever appended,
or removed in bulk when their product is deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TransactionType(Enum):
    ADDITION = "Addition"
    REMOVAL = "Removal"

    @property
    def sign(self) -> str:
        return "+" if self is TransactionType.ADDITION else "-"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Transaction:
    """A single stock movement against a product's SKU.

    ``quantity`` is always strictly positive; the direction is carried by
    ``transaction_type``. ``timestamp`` is a timezone-aware UTC datetime.
    """

    id: str
    product_sku: str
    transaction_type: TransactionType
    quantity: int
    timestamp: datetime
    notes: str | None = None

    @property
    def signed_quantity(self) -> int:
        """Effect of this movement on the product's on-hand quantity."""
        if self.transaction_type is TransactionType.ADDITION:
            return self.quantity
        return -self.quantity
