"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stock_control.domain.model.product import Product
from stock_control.domain.model.transaction import Transaction

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    sku: str
    name: str
    description: str
    quantity: int
    reorder_point: int
    is_low_stock: bool

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            sku=product.sku,
            name=product.name,
            description=product.description,
            quantity=product.quantity,
            reorder_point=product.reorder_point,
            is_low_stock=product.is_low_stock,
        )


@dataclass(frozen=True)
class TransactionLineDTO:
    """Output: one line of a product's history."""

    timestamp: str  # formatted, e.g. "2025-01-01 12:00:00"
    sign: str
    quantity: int
    kind: str  # "addition" / "removal"
    notes: str | None

    @staticmethod
    def from_domain(transaction: Transaction) -> TransactionLineDTO:
        return TransactionLineDTO(
            timestamp=transaction.timestamp.strftime(TIMESTAMP_FORMAT),
            sign=transaction.transaction_type.sign,
            quantity=transaction.quantity,
            kind=transaction.transaction_type.value.lower(),
            notes=transaction.notes,
        )


@dataclass(frozen=True)
class HistoryDTO:
    sku: str
    lines: list[TransactionLineDTO]
