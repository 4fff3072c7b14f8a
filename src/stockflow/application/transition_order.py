"""Application service: Transition Order Status use case.

The single entry point for status changes. Re-submitting the status an
order already has is a no-op and returns the order unchanged.
"""

from __future__ import annotations

from stockflow.application.dto import OrderDTO
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class TransitionOrderStatusHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(self, order_id: int, target_status: str) -> OrderDTO:
        order = self._lifecycle.transition_order_status(order_id, target_status)
        return OrderDTO.from_order(order)
