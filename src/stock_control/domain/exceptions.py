"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Storage failures share the same root: the service surfaces them unchanged.
"""

from __future__ import annotations

from pathlib import Path


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was rejected before any state change (empty SKU, zero quantity...)."""


class DuplicateSKUError(ValidationError):

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product with SKU '{sku}' already exists")
        self.sku = sku


class InsufficientStockError(ValidationError):
    """A removal would drive the on-hand quantity below zero."""

    def __init__(self, sku: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for '{sku}': "
            f"requested {requested}, available {available}"
        )
        self.sku = sku
        self.requested = requested
        self.available = available


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product '{sku}' not found")
        self.sku = sku


# --- Storage ------------------------------------------------------------------


class StorageError(DomainException):
    """The persistence layer could not load or save a collection."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StorageReadError(StorageError):
    """The backing file exists but could not be read."""


class StorageWriteError(StorageError):
    """The collection could not be written (or its directory created)."""


class StorageParseError(StorageError):
    """The backing file was read but its contents could not be decoded."""


class StorageNotFoundError(StorageError):
    """The backing file does not exist. Loads treat this as an empty collection."""
