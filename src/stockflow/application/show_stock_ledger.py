"""Application service: Show Stock Ledger use case (query).

Read-only view of a product's stock movements in insertion order, for
audit and export collaborators.
"""

from __future__ import annotations

from stockflow.application.dto import LedgerEntryDTO
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class ShowStockLedgerHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(self, product_id: str) -> list[LedgerEntryDTO]:
        return [
            LedgerEntryDTO.from_entry(entry)
            for entry in self._lifecycle.get_stock_ledger(product_id)
        ]
