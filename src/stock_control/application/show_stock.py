"""Application service: catalog and stock-level queries.

The service returns products in no particular order; this handler sorts
by SKU so listings are stable from one run to the next.
"""

from __future__ import annotations

from stock_control.application.dto import ProductDTO
from stock_control.domain.service.inventory_service import InventoryService


class ShowStockHandler:

    def __init__(self, service: InventoryService) -> None:
        self._service = service

    def show_product(self, sku: str) -> ProductDTO:
        return ProductDTO.from_domain(self._service.get_product(sku))

    def list_products(self) -> list[ProductDTO]:
        products = sorted(self._service.list_products(), key=lambda p: p.sku)
        return [ProductDTO.from_domain(p) for p in products]

    def list_low_stock(self) -> list[ProductDTO]:
        products = sorted(self._service.list_low_stock(), key=lambda p: p.sku)
        return [ProductDTO.from_domain(p) for p in products]
