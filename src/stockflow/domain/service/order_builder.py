"""Domain service: Order construction.

Turns validated line requests into an Order aggregate: resolves each
product, checks availability, snapshots price / SKU / name, sums the
total in Decimal and allocates the order number. It never moves stock;
that happens when the order enters ``completed``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from stockflow.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockflow.domain.model.order import Order, OrderLine, format_order_number
from stockflow.domain.model.value_objects import Money, Quantity
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor


@dataclass(frozen=True)
class LineRequest:
    product_id: str
    quantity: Quantity


class OrderBuilder:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        stock: ProductStockAccessor,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._stock = stock

    def build(
        self,
        customer_ref: str,
        lines: Sequence[LineRequest],
        created_by: str,
    ) -> Order:
        """Build an unsaved order, all-or-nothing.

        The first unsatisfiable line fails the whole build before an
        order number is allocated.
        """
        if not customer_ref or not customer_ref.strip():
            raise ValidationError("Customer reference is required")
        if not created_by or not created_by.strip():
            raise ValidationError("Creator reference is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        seen: set[str] = set()
        order_lines: list[OrderLine] = []
        for request in lines:
            if request.product_id in seen:
                raise ValidationError(
                    f"Product '{request.product_id}' appears on more than one line"
                )
            seen.add(request.product_id)
            order_lines.append(self._build_line(request))

        return Order(
            id=None,
            number=format_order_number(self._order_repo.next_number()),
            customer_ref=customer_ref.strip(),
            created_by=created_by.strip(),
            lines=order_lines,
            total_amount=Money.total(line.line_total for line in order_lines),
        )

    def _build_line(self, request: LineRequest) -> OrderLine:
        product = self._product_repo.get_by_id(request.product_id)
        if product is None:
            raise ProductNotFoundError(request.product_id)
        available = self._stock.get_available(product.id)
        if not product.is_active:
            raise ValidationError(f"Product {product.sku} is inactive")
        if request.quantity.value > available:
            raise InsufficientStockError(
                product_id=product.id,
                sku=product.sku,
                requested=request.quantity.value,
                available=available,
            )
        return OrderLine(
            product_id=product.id,
            sku=product.sku,
            product_name=product.name,
            quantity=request.quantity,
            unit_price=product.price,  # <-- price snapshot
        )
