"""Stock ledger entries.

One entry per committed change to a product's on-hand quantity.
Entries are immutable and only ever appended.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StockDirection(Enum):
    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"


@dataclass(frozen=True)
class LedgerEntry:
    """A single recorded stock movement.

    ``quantity`` is positive for IN/OUT. For ADJUSTMENT it is the signed
    delta that was actually applied.
    """

    id: int
    product_id: str
    direction: StockDirection
    quantity: int
    cause: str
    created_at: datetime

    @property
    def signed_delta(self) -> int:
        if self.direction == StockDirection.IN:
            return self.quantity
        if self.direction == StockDirection.OUT:
            return -self.quantity
        return self.quantity
