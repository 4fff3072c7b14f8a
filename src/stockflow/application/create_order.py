"""Application service: Create Order use case.

Validates the typed request at the boundary, then hands off to the
lifecycle controller, which owns availability checks, numbering and
(for orders created as ``completed``) the stock commitment.
"""

from __future__ import annotations

from stockflow.application.dto import CreateOrderRequest, OrderDTO
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class CreateOrderHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(self, request: CreateOrderRequest) -> OrderDTO:
        """Create a new sales order.

        Steps:
        1. Validate the request shape (no state touched on failure).
        2. Build the order against current stock and prices (snapshot).
        3. Commit stock if the initial status is ``completed``.
        4. Persist and return a DTO.
        """
        lines, initial_status = request.validated()
        order = self._lifecycle.create_order(
            customer_ref=request.customer_ref,
            lines=lines,
            created_by=request.created_by,
            initial_status=initial_status,
        )
        return OrderDTO.from_order(order)
