"""Data Transfer Objects: plain containers that cross layer boundaries.

Requests are validated here, before anything reaches the domain, so a
malformed payload is rejected without touching state. Responses carry
display-ready strings and never expose domain objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.order import Order, OrderStatus
from stockflow.domain.model.product import Product
from stockflow.domain.model.stock_ledger import LedgerEntry
from stockflow.domain.model.value_objects import Quantity
from stockflow.domain.service.order_builder import LineRequest

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: one requested line (product ID + quantity)."""

    product_id: str
    quantity: int

    def to_line_request(self) -> LineRequest:
        if not self.product_id or not str(self.product_id).strip():
            raise ValidationError("Line product ID is required")
        return LineRequest(
            product_id=str(self.product_id).strip(),
            quantity=Quantity(self.quantity),
        )


@dataclass(frozen=True)
class CreateOrderRequest:
    customer_ref: str
    created_by: str
    lines: list[OrderLineSpec]
    initial_status: str = OrderStatus.PENDING.value

    def validated(self) -> tuple[list[LineRequest], OrderStatus]:
        if not self.customer_ref or not self.customer_ref.strip():
            raise ValidationError("Customer reference is required")
        if not self.created_by or not self.created_by.strip():
            raise ValidationError("Creator reference is required")
        if not self.lines:
            raise ValidationError("Order must contain at least one line")
        return (
            [spec.to_line_request() for spec in self.lines],
            OrderStatus.parse(self.initial_status),
        )


@dataclass(frozen=True)
class AddProductRequest:
    sku: str
    name: str
    price: str
    quantity: int = 0
    minimum_stock: int = 0


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single line as displayed to the user."""

    product_id: str
    sku: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    number: str
    customer_ref: str
    created_by: str
    status: str
    lines: list[OrderLineDTO]
    total: str
    ordered_at: str
    notes: str = ""

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            number=order.number,
            customer_ref=order.customer_ref,
            created_by=order.created_by,
            status=order.status.value,
            lines=[
                OrderLineDTO(
                    product_id=line.product_id,
                    sku=line.sku,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            total=str(order.total_amount),
            ordered_at=order.ordered_at.strftime("%Y-%m-%d %H:%M UTC"),
            notes=order.notes,
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    sku: str
    name: str
    price: str
    quantity: int
    minimum_stock: int
    status: str
    low_stock: bool

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            sku=product.sku,
            name=product.name,
            price=str(product.price),
            quantity=product.quantity,
            minimum_stock=product.minimum_stock,
            status=product.status.value,
            low_stock=product.is_low_stock,
        )


@dataclass(frozen=True)
class LedgerEntryDTO:
    id: int
    product_id: str
    direction: str
    quantity: int
    signed_delta: int
    cause: str
    created_at: str

    @staticmethod
    def from_entry(entry: LedgerEntry) -> LedgerEntryDTO:
        return LedgerEntryDTO(
            id=entry.id,
            product_id=entry.product_id,
            direction=entry.direction.value,
            quantity=entry.quantity,
            signed_delta=entry.signed_delta,
            cause=entry.cause,
            created_at=entry.created_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
        )


@dataclass(frozen=True)
class ProductRemovalDTO:
    product_id: str
    deleted: bool  # False means soft-deactivated


@dataclass(frozen=True)
class ReconciliationDTO:
    product_id: str
    sku: str
    on_hand: int
    ledger_balance: int
    balanced: bool


@dataclass(frozen=True)
class ReconciliationSummaryDTO:
    reports: list[ReconciliationDTO] = field(default_factory=list)

    @property
    def all_balanced(self) -> bool:
        return all(r.balanced for r in self.reports)
