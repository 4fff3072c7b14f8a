"""Application service: Delete Order use case.

Completed orders are refused: cancel first so the stock comes back
through the ledger.
"""

from __future__ import annotations

from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class DeleteOrderHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(self, order_id: int) -> None:
        self._lifecycle.delete_order(order_id)
