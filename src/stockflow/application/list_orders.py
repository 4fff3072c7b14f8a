"""Application service: List Orders use case (query)."""

from __future__ import annotations

from stockflow.application.dto import OrderDTO
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class ListOrdersHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(
        self,
        status: str | None = None,
        search: str | None = None,
    ) -> list[OrderDTO]:
        """Newest first, optionally filtered by status and number/customer search."""
        orders = self._lifecycle.list_orders(status, search=search)
        return [OrderDTO.from_order(o) for o in orders]
