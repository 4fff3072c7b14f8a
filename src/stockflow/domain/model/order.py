"""Order aggregate and its status state machine.

The Order is an aggregate root that owns its lines. The rules for which
status changes are legal, and which stock side effect each one implies,
live here and nowhere else. Applying the side effect is the job of the
OrderLifecycleController.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from stockflow.domain.exceptions import InvalidTransitionError, ValidationError
from stockflow.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_open(self) -> bool:
        return self not in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        try:
            return OrderStatus(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{raw}' (expected one of: {allowed})"
            ) from None


class StockEffect(Enum):
    """What a status transition does to on-hand stock."""

    NONE = "none"
    COMMIT = "commit"  # decrement every line
    RELEASE = "release"  # increment every line (exact reversal of COMMIT)


@dataclass(frozen=True)
class OrderLine:
    """One product on an order, with its price snapshot.

    ``unit_price`` is locked at order-creation time; later catalog price
    changes never touch historical lines.
    """

    product_id: str
    sku: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for sales orders.

    Build new orders with ``OrderBuilder``; the ``__init__`` stays plain so
    repositories can reconstitute persisted orders without re-validating.
    ``total_amount`` is stored, never recomputed on read.
    """

    id: int | None
    number: str
    customer_ref: str
    created_by: str
    lines: list[OrderLine]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    notes: str = ""
    ordered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- State machine --------------------------------------------------------

    def plan_transition(self, target: OrderStatus) -> StockEffect | None:
        """Decide what moving to *target* implies.

        Returns None when the order is already in *target* (a retried
        request must not apply its side effect twice). Raises
        InvalidTransitionError for illegal moves.
        """
        current = self.status
        if target == current:
            return None

        if current == OrderStatus.CANCELLED:
            raise InvalidTransitionError(
                current.value, target.value, "cancelled orders are final"
            )

        if current == OrderStatus.COMPLETED:
            if target == OrderStatus.CANCELLED:
                return StockEffect.RELEASE
            raise InvalidTransitionError(
                current.value, target.value,
                "a completed order can only be cancelled",
            )

        if target == OrderStatus.COMPLETED:
            return StockEffect.COMMIT
        return StockEffect.NONE

    def apply_transition(self, target: OrderStatus) -> None:
        """Set the new status. Stock must already reflect the transition."""
        self.plan_transition(target)
        self.status = target

    # --- Administrative edits -------------------------------------------------

    def update_details(
        self,
        customer_ref: str | None = None,
        notes: str | None = None,
    ) -> None:
        if customer_ref is not None:
            if not customer_ref.strip():
                raise ValidationError("Customer reference is required")
            self.customer_ref = customer_ref.strip()
        if notes is not None:
            self.notes = notes

    # --- Computed properties --------------------------------------------------

    @property
    def lines_total(self) -> Money:
        return Money.total(line.line_total for line in self.lines)

    @property
    def holds_committed_stock(self) -> bool:
        return self.status == OrderStatus.COMPLETED

    def stock_changes(self, effect: StockEffect) -> list[tuple[str, int]]:
        """Per-line (product_id, delta) pairs for a stock effect."""
        if effect == StockEffect.COMMIT:
            return [(line.product_id, -line.quantity.value) for line in self.lines]
        if effect == StockEffect.RELEASE:
            return [(line.product_id, line.quantity.value) for line in self.lines]
        return []

    @property
    def product_ids(self) -> list[str]:
        return [line.product_id for line in self.lines]


def format_order_number(sequence: int) -> str:
    return f"ORD-{sequence:06d}"
