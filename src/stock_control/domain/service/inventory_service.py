"""Domain service: Inventory.

Owns the product catalog (keyed by SKU) and the stock ledger
(insertion-ordered). Every public operation either:

  * fails validation and raises before touching state or storage, or
  * mutates in-memory state, then saves the affected collection(s)
    through the repository.

A storage failure after a mutation is raised to the caller as-is; the
in-memory change is NOT rolled back. Stock movements and deletions save
products first, then transactions.

Not safe for concurrent use. Callers must serialize access.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from stock_control.domain.clock import Clock, SystemClock
from stock_control.domain.exceptions import (
    DuplicateSKUError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stock_control.domain.model.product import Product
from stock_control.domain.model.transaction import Transaction, TransactionType
from stock_control.domain.model.value_objects import Quantity
from stock_control.domain.repository.inventory_repository import InventoryRepository
from stock_control.logging_config import get_logger

logger = get_logger("service.inventory")


def _new_id() -> str:
    return str(uuid4())


class InventoryService:

    def __init__(
        self,
        repository: InventoryRepository,
        clock: Clock | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or SystemClock()
        self._new_id = id_factory or _new_id

        # Storage errors propagate: a service that cannot load is not built.
        self._products: dict[str, Product] = {
            p.sku: p for p in repository.load_products()
        }
        self._transactions: list[Transaction] = list(repository.load_transactions())
        logger.debug(
            "Loaded %d products and %d transactions",
            len(self._products),
            len(self._transactions),
        )

    # --- Catalog commands -----------------------------------------------------

    def add_product(
        self,
        sku: str,
        name: str,
        description: str,
        initial_quantity: int,
        reorder_point: int,
    ) -> Product:
        """Create a new product and persist the catalog."""
        if not sku or not sku.strip():
            raise ValidationError("SKU cannot be empty")
        if not name or not name.strip():
            raise ValidationError("Name cannot be empty")
        _require_non_negative(initial_quantity, "Initial quantity")
        _require_non_negative(reorder_point, "Reorder point")

        if sku in self._products:
            raise DuplicateSKUError(sku)

        product = Product(
            id=self._new_id(),
            sku=sku,
            name=name,
            description=description,
            quantity=initial_quantity,
            reorder_point=reorder_point,
        )
        self._products[sku] = product

        self._persist_products()
        logger.info("Added product %s (quantity=%d)", sku, initial_quantity)
        return replace(product)

    def update_product(
        self,
        sku: str,
        name: str | None = None,
        description: str | None = None,
        reorder_point: int | None = None,
    ) -> Product:
        """Change any of name, description and reorder point.

        Absent fields are left untouched. Quantity is not updatable here:
        stock only changes through ``add_stock`` / ``remove_stock``.
        """
        product = self._require_product(sku)

        # Validate everything before applying anything
        if name is not None and not name.strip():
            raise ValidationError("Name cannot be empty")
        if reorder_point is not None:
            _require_non_negative(reorder_point, "Reorder point")

        if name is not None:
            product.name = name
        if description is not None:
            product.description = description
        if reorder_point is not None:
            product.reorder_point = reorder_point

        self._persist_products()
        logger.info("Updated product %s", sku)
        return replace(product)

    def delete_product(self, sku: str) -> None:
        """Remove the product and drain its transactions from the ledger.

        Allowed regardless of the current stock level.
        """
        self._require_product(sku)

        del self._products[sku]
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.product_sku != sku]

        self._persist_products()
        self._persist_transactions()
        logger.info(
            "Deleted product %s and %d transactions",
            sku,
            before - len(self._transactions),
        )

    # --- Stock movements ------------------------------------------------------

    def add_stock(self, sku: str, quantity: int, notes: str | None = None) -> Transaction:
        """Receive ``quantity`` units of a product and record an Addition."""
        qty = Quantity(quantity)
        product = self._require_product(sku)

        product.quantity += qty.value
        return self._record(product, TransactionType.ADDITION, qty, notes)

    def remove_stock(self, sku: str, quantity: int, notes: str | None = None) -> Transaction:
        """Withdraw ``quantity`` units of a product and record a Removal.

        Raises InsufficientStockError if that would drive stock below zero.
        """
        qty = Quantity(quantity)
        product = self._require_product(sku)
        if qty.value > product.quantity:
            raise InsufficientStockError(
                sku=sku, requested=qty.value, available=product.quantity
            )

        product.quantity -= qty.value
        return self._record(product, TransactionType.REMOVAL, qty, notes)

    # --- Queries --------------------------------------------------------------

    def get_product(self, sku: str) -> Product:
        return replace(self._require_product(sku))

    def list_products(self) -> list[Product]:
        """Snapshot of the whole catalog. Order is unspecified."""
        return [replace(p) for p in self._products.values()]

    def list_low_stock(self) -> list[Product]:
        """Products whose quantity is at or below their reorder point."""
        return [replace(p) for p in self._products.values() if p.is_low_stock]

    def get_transactions(self, sku: str) -> list[Transaction]:
        """History of ``sku``, oldest first.

        Does not check that the product exists. Entries with equal
        timestamps keep their ledger (insertion) order.
        """
        return sorted(
            (t for t in self._transactions if t.product_sku == sku),
            key=lambda t: t.timestamp,
        )

    def get_transactions_in_range(
        self, sku: str, start: datetime, end: datetime
    ) -> list[Transaction]:
        """Like ``get_transactions`` restricted to ``start <= timestamp <= end``.

        Naive bounds are read as UTC.
        """
        start, end = _as_utc(start), _as_utc(end)
        return [
            t for t in self.get_transactions(sku) if start <= t.timestamp <= end
        ]

    # --- Internal helpers -----------------------------------------------------

    def _require_product(self, sku: str) -> Product:
        product = self._products.get(sku)
        if product is None:
            raise ProductNotFoundError(sku)
        return product

    def _record(
        self,
        product: Product,
        transaction_type: TransactionType,
        qty: Quantity,
        notes: str | None,
    ) -> Transaction:
        transaction = Transaction(
            id=self._new_id(),
            product_sku=product.sku,
            transaction_type=transaction_type,
            quantity=qty.value,
            timestamp=self._clock.now(),
            notes=notes,
        )
        self._transactions.append(transaction)

        self._persist_products()
        self._persist_transactions()
        logger.info(
            "%s of %d for %s (quantity now %d)",
            transaction_type.value,
            qty.value,
            product.sku,
            product.quantity,
        )
        return transaction

    def _persist_products(self) -> None:
        self._repository.save_products([replace(p) for p in self._products.values()])

    def _persist_transactions(self) -> None:
        self._repository.save_transactions(list(self._transactions))


def _require_non_negative(value: int, label: str) -> None:
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
