"""Application service: Edit Order use case.

Administrative edit of the customer reference and notes. Status is not
editable here; it only changes through TransitionOrderStatusHandler.
"""

from __future__ import annotations

from stockflow.application.dto import OrderDTO
from stockflow.domain.exceptions import ValidationError
from stockflow.domain.service.order_lifecycle import OrderLifecycleController


class EditOrderHandler:

    def __init__(self, lifecycle: OrderLifecycleController) -> None:
        self._lifecycle = lifecycle

    def handle(
        self,
        order_id: int,
        customer_ref: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        if customer_ref is None and notes is None:
            raise ValidationError("Nothing to update")
        order = self._lifecycle.edit_order(order_id, customer_ref=customer_ref, notes=notes)
        return OrderDTO.from_order(order)
