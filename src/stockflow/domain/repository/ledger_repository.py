"""Abstract repository for stock ledger entries.

Append-only: there is deliberately no update or delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from stockflow.domain.model.stock_ledger import LedgerEntry, StockDirection


class LedgerRepository(ABC):

    @abstractmethod
    def append(
        self,
        product_id: str,
        direction: StockDirection,
        quantity: int,
        cause: str,
        created_at: datetime,
    ) -> LedgerEntry:
        """Write one entry whole, assigning the next entry ID."""

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[LedgerEntry]:
        """Return a product's entries in insertion order."""

    @abstractmethod
    def list_all(self) -> list[LedgerEntry]:
        """Return every entry in insertion order."""
