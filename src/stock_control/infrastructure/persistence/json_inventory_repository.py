"""JSON-file-backed implementation of InventoryRepository.

Two files: ``products.json`` and ``transactions.json``, each a
pretty-printed list of records. A missing (or blank) file is an empty
collection. Each save replaces its file atomically via a temp file and
rename; the two files are still written independently.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from stock_control.domain.exceptions import (
    StorageNotFoundError,
    StorageParseError,
    StorageReadError,
    StorageWriteError,
)
from stock_control.domain.model.product import Product
from stock_control.domain.model.transaction import Transaction, TransactionType
from stock_control.domain.repository.inventory_repository import InventoryRepository
from stock_control.logging_config import get_logger

logger = get_logger("persistence.json")

PRODUCTS_FILE = "products.json"
TRANSACTIONS_FILE = "transactions.json"


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, products_path: Path, transactions_path: Path) -> None:
        self._products_path = Path(products_path)
        self._transactions_path = Path(transactions_path)

    @classmethod
    def in_directory(cls, data_dir: Path) -> JsonInventoryRepository:
        """Store both collections under ``data_dir`` with the default file names."""
        data_dir = Path(data_dir)
        return cls(data_dir / PRODUCTS_FILE, data_dir / TRANSACTIONS_FILE)

    @property
    def products_path(self) -> Path:
        return self._products_path

    @property
    def transactions_path(self) -> Path:
        return self._transactions_path

    # --- InventoryRepository interface ----------------------------------------

    def load_products(self) -> list[Product]:
        return self._load(self._products_path, self._product_to_domain)

    def load_transactions(self) -> list[Transaction]:
        return self._load(self._transactions_path, self._transaction_to_domain)

    def save_products(self, products: Sequence[Product]) -> None:
        self._persist_raw(self._products_path, [self._product_to_raw(p) for p in products])

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        self._persist_raw(
            self._transactions_path,
            [self._transaction_to_raw(t) for t in transactions],
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "sku": product.sku,
            "name": product.name,
            "description": product.description,
            "quantity": product.quantity,
            "reorder_point": product.reorder_point,
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            sku=raw["sku"],
            name=raw["name"],
            description=raw["description"],
            quantity=_non_negative_int(raw["quantity"], "quantity"),
            reorder_point=_non_negative_int(raw["reorder_point"], "reorder_point"),
        )

    @staticmethod
    def _transaction_to_raw(transaction: Transaction) -> dict:
        return {
            "id": transaction.id,
            "product_sku": transaction.product_sku,
            "transaction_type": transaction.transaction_type.value,
            "quantity": transaction.quantity,
            "timestamp": transaction.timestamp.isoformat(),
            "notes": transaction.notes,
        }

    @staticmethod
    def _transaction_to_domain(raw: dict) -> Transaction:
        timestamp = datetime.fromisoformat(raw["timestamp"])
        if timestamp.tzinfo is None:
            raise ValueError(f"timestamp {raw['timestamp']!r} has no UTC offset")
        return Transaction(
            id=raw["id"],
            product_sku=raw["product_sku"],
            transaction_type=TransactionType(raw["transaction_type"]),
            quantity=_non_negative_int(raw["quantity"], "quantity"),
            timestamp=timestamp,
            notes=raw.get("notes"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self, path: Path, to_domain) -> list:
        try:
            records = self._load_raw(path)
        except StorageNotFoundError:
            logger.debug("%s does not exist yet, starting empty", path)
            return []

        try:
            return [to_domain(raw) for raw in records]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageParseError(
                f"Failed to parse {path}: invalid record ({exc})", path
            ) from exc

    def _load_raw(self, path: Path) -> list[dict]:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StorageNotFoundError(f"Storage file not found: {path}", path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Failed to read {path}: {exc}", path) from exc

        logger.debug("Read %s (%d bytes)", path, len(text))
        if not text.strip():
            return []

        try:
            records = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageParseError(f"Failed to parse {path}: {exc}", path) from exc
        if not isinstance(records, list):
            raise StorageParseError(
                f"Failed to parse {path}: expected a JSON list", path
            )
        return records

    def _persist_raw(self, path: Path, records: list[dict]) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
            tmp_path.replace(path)
        except OSError as exc:
            raise StorageWriteError(f"Failed to write {path}: {exc}", path) from exc
        logger.debug("Wrote %d records to %s", len(records), path)


def _non_negative_int(value, field: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"{field} must be a non-negative integer, got {value!r}")
    return value
