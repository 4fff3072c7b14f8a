"""Application service: Adjust Stock use case.

Manual stock movements outside the order lifecycle:

- ``in``: receive *quantity* units,
- ``out``: remove *quantity* units (refused below zero),
- ``adjustment``: set on-hand to *quantity* after a stock take; the
  ledger records the signed difference.
"""

from __future__ import annotations

from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.stock_ledger import StockDirection
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor


class AdjustStockHandler:

    def __init__(self, stock: ProductStockAccessor) -> None:
        self._stock = stock

    def handle(
        self,
        product_id: str,
        movement_type: str,
        quantity: int,
        cause: str | None = None,
    ) -> int:
        """Apply the movement and return the new on-hand quantity."""
        try:
            direction = StockDirection(movement_type.strip().lower())
        except ValueError:
            raise ValidationError(
                f"Type must be in, out, or adjustment (got '{movement_type}')"
            ) from None

        reason = cause.strip() if cause and cause.strip() else f"Stock {direction.value}"

        if direction == StockDirection.ADJUSTMENT:
            return self._stock.set_quantity(product_id, quantity, reason)

        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError("Quantity must be a positive integer")
        delta = quantity if direction == StockDirection.IN else -quantity
        return self._stock.adjust(product_id, delta, reason)
