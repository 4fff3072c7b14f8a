"""Domain service: Product Stock Accessor.

The only code path that changes a product's on-hand quantity. Each
change is a read-check-write-append unit executed under the product's
lock:

  1. read the current quantity,
  2. refuse the change if it would go below zero,
  3. write the new quantity,
  4. append the matching stock ledger entry.

If step 4 fails, step 3 is reverted before the fault propagates, so the
ledger always reproduces the on-hand quantity.

Multi-product changes (``adjust_many``) lock every product in sorted ID
order, validate every change before writing any, and compensate the
already-written changes if a storage fault interrupts the write phase.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from stockflow.domain.exceptions import (
    InsufficientStockError,
    PersistenceError,
    ProductNotFoundError,
    ValidationError,
)
from stockflow.domain.model.product import Product
from stockflow.domain.model.stock_ledger import StockDirection
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.locks import KeyedLockRegistry, product_key
from stockflow.domain.service.stock_ledger import StockLedger
from stockflow.logging_config import get_logger

logger = get_logger("domain.stock")

INITIAL_STOCK_CAUSE = "Initial stock"


def _require_cause(cause: str) -> str:
    if not cause or not cause.strip():
        raise ValidationError("Stock change cause is required")
    return cause.strip()


@dataclass(frozen=True)
class ReconciliationReport:
    product_id: str
    sku: str
    on_hand: int
    ledger_balance: int

    @property
    def balanced(self) -> bool:
        return self.on_hand == self.ledger_balance

    @property
    def discrepancy(self) -> int:
        return self.on_hand - self.ledger_balance


class ProductStockAccessor:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: StockLedger,
        locks: KeyedLockRegistry,
    ) -> None:
        self._product_repo = product_repo
        self._ledger = ledger
        self._locks = locks

    # --- Queries --------------------------------------------------------------

    def get_available(self, product_id: str) -> int:
        return self._require(product_id).quantity

    def reconcile(self, product_id: str) -> ReconciliationReport:
        with self._locks.hold([product_key(product_id)]):
            product = self._require(product_id)
            return ReconciliationReport(
                product_id=product.id,
                sku=product.sku,
                on_hand=product.quantity,
                ledger_balance=self._ledger.balance_of(product.id),
            )

    # --- Mutations ------------------------------------------------------------

    def adjust(self, product_id: str, delta: int, cause: str) -> int:
        """Apply a signed change and return the new on-hand quantity.

        Negative *delta* decrements (an ``out`` entry), positive increments
        (an ``in`` entry).
        """
        return self.adjust_many([(product_id, delta)], cause)[product_id]

    def adjust_many(
        self,
        changes: Iterable[tuple[str, int]],
        cause: str,
    ) -> dict[str, int]:
        """Apply several per-product changes as one unit.

        Either every change lands (one ledger entry each) or none does.
        Returns the new quantity per touched product.
        """
        cause = _require_cause(cause)
        merged = self._merge(changes)
        result: dict[str, int] = {}

        with self._locks.hold(product_key(pid) for pid in merged):
            # Phase 1: validate everything against the same reads we write from
            planned: list[tuple[Product, int]] = []
            for product_id, delta in merged.items():
                product = self._require(product_id)
                if product.quantity + delta < 0:
                    logger.info(
                        "stock_adjust_rejected",
                        extra={
                            "product_id": product.id,
                            "sku": product.sku,
                            "requested": -delta,
                            "available": product.quantity,
                            "cause": cause,
                        },
                    )
                    raise InsufficientStockError(
                        product_id=product.id,
                        sku=product.sku,
                        requested=-delta,
                        available=product.quantity,
                    )
                planned.append((product, delta))

            # Phase 2: write, compensating on a storage fault
            applied: list[tuple[Product, int]] = []
            try:
                for product, delta in planned:
                    if delta == 0:
                        result[product.id] = product.quantity
                        continue
                    direction = StockDirection.IN if delta > 0 else StockDirection.OUT
                    result[product.id] = self._write(
                        product, product.quantity + delta, direction, abs(delta), cause
                    )
                    applied.append((product, delta))
            except Exception:
                self._compensate(applied, cause)
                raise

        return result

    def set_quantity(self, product_id: str, new_quantity: int, cause: str) -> int:
        """Set on-hand quantity to an absolute count (stock take).

        Recorded as an ``adjustment`` entry carrying the signed delta.
        Setting the current value again records nothing.
        """
        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool):
            raise ValidationError("Stock quantity must be an integer")
        if new_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        cause = _require_cause(cause)

        with self._locks.hold([product_key(product_id)]):
            product = self._require(product_id)
            delta = new_quantity - product.quantity
            if delta == 0:
                return product.quantity
            return self._write(
                product, new_quantity, StockDirection.ADJUSTMENT, delta, cause
            )

    def receive_initial(self, product_id: str, quantity: int) -> int:
        """Book a new product's opening stock into the ledger."""
        if quantity == 0:
            return self.get_available(product_id)
        return self.adjust(product_id, quantity, INITIAL_STOCK_CAUSE)

    # --- Internal helpers -----------------------------------------------------

    def _write(
        self,
        product: Product,
        new_quantity: int,
        direction: StockDirection,
        ledger_quantity: int,
        cause: str,
    ) -> int:
        previous = product.quantity
        self._product_repo.update_quantity(product.id, new_quantity)
        try:
            self._ledger.append(product.id, direction, ledger_quantity, cause)
        except Exception:
            self._product_repo.update_quantity(product.id, previous)
            raise
        logger.info(
            "stock_adjusted",
            extra={
                "product_id": product.id,
                "sku": product.sku,
                "direction": direction.value,
                "quantity": ledger_quantity,
                "previous": previous,
                "current": new_quantity,
                "cause": cause,
            },
        )
        return new_quantity

    def _compensate(self, applied: list[tuple[Product, int]], cause: str) -> None:
        """Undo already-written changes with reversing ledger entries."""
        for product, delta in reversed(applied):
            current = self._require(product.id).quantity
            direction = StockDirection.OUT if delta > 0 else StockDirection.IN
            try:
                self._write(
                    product, current - delta, direction, abs(delta),
                    f"Reversal of interrupted change: {cause}",
                )
            except PersistenceError:
                logger.error(
                    "stock_compensation_failed",
                    extra={"product_id": product.id, "delta": -delta, "cause": cause},
                    exc_info=True,
                )
                continue
            logger.warning(
                "stock_compensated",
                extra={"product_id": product.id, "delta": -delta, "cause": cause},
            )

    def _require(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def _merge(changes: Iterable[tuple[str, int]]) -> dict[str, int]:
        merged: dict[str, int] = {}
        for product_id, delta in changes:
            if not isinstance(delta, int) or isinstance(delta, bool):
                raise ValidationError("Stock delta must be an integer")
            if delta == 0:
                raise ValidationError("Stock delta cannot be zero")
            merged[product_id] = merged.get(product_id, 0) + delta
        if not merged:
            raise ValidationError("At least one stock change is required")
        return dict(sorted(merged.items()))
