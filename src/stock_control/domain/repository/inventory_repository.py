"""Abstract repository for the product catalog and the stock ledger.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer or in tests.

Both collections are loaded and saved whole: there is no partial update.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from stock_control.domain.model.product import Product
from stock_control.domain.model.transaction import Transaction


class InventoryRepository(ABC):

    @abstractmethod
    def load_products(self) -> list[Product]:
        """Return every persisted product, or [] if nothing was saved yet.

        Raises StorageReadError / StorageParseError when the backing
        store exists but cannot be read or decoded.
        """

    @abstractmethod
    def load_transactions(self) -> list[Transaction]:
        """Return the persisted ledger in insertion order, or [] if none."""

    @abstractmethod
    def save_products(self, products: Sequence[Product]) -> None:
        """Overwrite the persisted catalog. Raises StorageWriteError."""

    @abstractmethod
    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        """Overwrite the persisted ledger. Raises StorageWriteError."""
