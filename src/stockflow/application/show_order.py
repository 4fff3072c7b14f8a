"""Application service: Show Order use case (query)."""

from __future__ import annotations

from stockflow.application.dto import OrderDTO
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class ShowOrderHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(self, order_id: int) -> OrderDTO:
        return OrderDTO.from_order(self._lifecycle.get_order(order_id))
