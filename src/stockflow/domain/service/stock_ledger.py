"""Domain service: Stock Ledger.

The append-only audit trail of stock changes. It validates entry shape
and timestamps entries; the repository assigns IDs in insertion order.
Entries are only ever appended by the ProductStockAccessor, as the
second half of a quantity change it has just written.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.stock_ledger import LedgerEntry, StockDirection
from stockflow.domain.repository.ledger_repository import LedgerRepository
from stockflow.logging_config import get_logger

logger = get_logger("domain.stock_ledger")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockLedger:

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ledger_repo = ledger_repo
        self._clock = clock

    def append(
        self,
        product_id: str,
        direction: StockDirection,
        quantity: int,
        cause: str,
    ) -> int:
        """Record one stock movement and return its entry ID.

        ``quantity`` must be positive for IN/OUT. For ADJUSTMENT the
        caller passes the already-signed, non-zero delta.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValidationError("Ledger quantity must be an integer")
        if direction == StockDirection.ADJUSTMENT:
            if quantity == 0:
                raise ValidationError("Adjustment delta cannot be zero")
        elif quantity <= 0:
            raise ValidationError(
                f"Ledger quantity for '{direction.value}' must be positive"
            )
        if not cause or not cause.strip():
            raise ValidationError("Ledger entry cause is required")

        entry = self._ledger_repo.append(
            product_id=product_id,
            direction=direction,
            quantity=quantity,
            cause=cause.strip(),
            created_at=self._clock(),
        )
        logger.debug(
            "ledger_entry_appended",
            extra={
                "entry_id": entry.id,
                "product_id": product_id,
                "direction": direction.value,
                "quantity": quantity,
                "cause": entry.cause,
            },
        )
        return entry.id

    def entries_for(self, product_id: str) -> list[LedgerEntry]:
        return self._ledger_repo.list_for_product(product_id)

    def balance_of(self, product_id: str) -> int:
        """Sum of signed deltas; equals on-hand quantity when reconciled."""
        return sum(entry.signed_delta for entry in self.entries_for(product_id))
