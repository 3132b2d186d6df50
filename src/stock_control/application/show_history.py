"""Application service: Show History use case (query)."""

from __future__ import annotations

from datetime import datetime, timezone

from stock_control.application.dto import HistoryDTO, TransactionLineDTO
from stock_control.domain.service.inventory_service import InventoryService

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


class ShowHistoryHandler:

    def __init__(self, service: InventoryService) -> None:
        self._service = service

    def handle(
        self,
        sku: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> HistoryDTO:
        """Return a product's stock movements, oldest first.

        Unlike the raw ledger query this checks that the product exists,
        so an unknown SKU raises ProductNotFoundError instead of returning
        an empty history. When only one bound is given the other side of
        the window is left open.
        """
        self._service.get_product(sku)

        if start is None and end is None:
            transactions = self._service.get_transactions(sku)
        else:
            transactions = self._service.get_transactions_in_range(
                sku, start or _EARLIEST, end or _LATEST
            )

        return HistoryDTO(
            sku=sku,
            lines=[TransactionLineDTO.from_domain(t) for t in transactions],
        )
