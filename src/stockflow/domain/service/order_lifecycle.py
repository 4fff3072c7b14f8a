"""Domain service: Order Lifecycle Controller.

Every way of creating an order or changing its status goes through
here. The controller asks the Order aggregate what a transition means
(``plan_transition``) and applies the implied stock effect through the
ProductStockAccessor, under locks:

    order lock  ->  product locks (sorted by product ID)

Holding the order lock makes a retried transition see the status the
first attempt wrote, so it becomes a no-op instead of a second stock
movement. Holding the product locks across the stock change *and* the
order save means a failed save can be compensated before anyone else
observes the intermediate stock level.
"""

from __future__ import annotations

from collections.abc import Sequence

from stockflow.domain.exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    PersistenceError,
    ProductNotFoundError,
    ValidationError,
)
from stockflow.domain.model.order import Order, OrderStatus, StockEffect
from stockflow.domain.model.stock_ledger import LedgerEntry
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.locks import KeyedLockRegistry, order_key, product_key
from stockflow.domain.service.order_builder import LineRequest, OrderBuilder
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor
from stockflow.domain.service.stock_ledger import StockLedger
from stockflow.logging_config import LogContext, get_logger

logger = get_logger("domain.order_lifecycle")


def _stock_cause(order: Order, target: OrderStatus) -> str:
    return f"order {order.number} {target.value}"


class OrderLifecycleController:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        stock: ProductStockAccessor,
        ledger: StockLedger,
        locks: KeyedLockRegistry,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._stock = stock
        self._ledger = ledger
        self._locks = locks
        self._builder = OrderBuilder(order_repo, product_repo, stock)

    # --- Commands -------------------------------------------------------------

    def create_order(
        self,
        customer_ref: str,
        lines: Sequence[LineRequest],
        created_by: str,
        initial_status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Build and persist a new order.

        With ``initial_status=COMPLETED`` the stock commitment is part of
        the same unit: if it fails, no order exists afterwards.
        """
        if initial_status == OrderStatus.CANCELLED:
            raise ValidationError("An order cannot be created as cancelled")

        with self._locks.hold(product_key(line.product_id) for line in lines):
            order = self._builder.build(customer_ref, lines, created_by)

            with LogContext.bind(order_number=order.number):
                changes: list[tuple[str, int]] = []
                if initial_status == OrderStatus.COMPLETED:
                    changes = order.stock_changes(StockEffect.COMMIT)
                    self._stock.adjust_many(changes, _stock_cause(order, initial_status))
                order.status = initial_status

                self._save_or_compensate(order, changes)
                logger.info(
                    "order_created",
                    extra={
                        "order_id": order.id,
                        "status": order.status.value,
                        "customer_ref": order.customer_ref,
                        "created_by": order.created_by,
                        "line_count": len(order.lines),
                        "total_amount": order.total_amount.amount,
                    },
                )
        return order

    def transition_order_status(
        self,
        order_id: int,
        target_status: OrderStatus | str,
    ) -> Order:
        """Move an order to *target_status*, applying its stock effect."""
        target = OrderStatus.parse(target_status)

        with self._locks.hold([order_key(order_id)]):
            order = self._require_order(order_id)

            with LogContext.bind(order_number=order.number):
                try:
                    effect = order.plan_transition(target)
                except InvalidTransitionError:
                    logger.info(
                        "order_transition_rejected",
                        extra={
                            "order_id": order.id,
                            "current": order.status.value,
                            "target": target.value,
                        },
                    )
                    raise

                if effect is None:
                    logger.info(
                        "order_transition_noop",
                        extra={"order_id": order.id, "status": order.status.value},
                    )
                    return order

                previous = order.status
                with self._locks.hold(product_key(pid) for pid in order.product_ids):
                    changes = order.stock_changes(effect)
                    if changes:
                        self._stock.adjust_many(changes, _stock_cause(order, target))
                    order.apply_transition(target)
                    try:
                        self._save_or_compensate(order, changes)
                    except PersistenceError:
                        order.status = previous
                        raise

                logger.info(
                    "order_status_changed",
                    extra={
                        "order_id": order.id,
                        "from_status": previous.value,
                        "to_status": target.value,
                        "stock_effect": effect.value,
                    },
                )
        return order

    def edit_order(
        self,
        order_id: int,
        customer_ref: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Administrative edit of non-status fields."""
        with self._locks.hold([order_key(order_id)]):
            order = self._require_order(order_id)
            order.update_details(customer_ref=customer_ref, notes=notes)
            self._order_repo.save(order)
        logger.info("order_edited", extra={"order_id": order_id})
        return order

    def delete_order(self, order_id: int) -> None:
        """Delete an order that holds no committed stock.

        A completed order must be cancelled first so its stock is
        returned through the ledger.
        """
        with self._locks.hold([order_key(order_id)]):
            order = self._require_order(order_id)
            if order.holds_committed_stock:
                raise InvalidTransitionError(
                    order.status.value, "deleted",
                    "cancel the order first to return its stock",
                )
            self._order_repo.delete(order_id)
        logger.info(
            "order_deleted",
            extra={"order_id": order_id, "order_number": order.number},
        )

    # --- Queries --------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        return self._require_order(order_id)

    def list_orders(
        self,
        status: OrderStatus | str | None = None,
        search: str | None = None,
    ) -> list[Order]:
        """Orders newest first, optionally filtered by status and by a
        case-insensitive match on order number or customer reference."""
        orders = self._order_repo.list_all()
        if status is not None:
            wanted = OrderStatus.parse(status)
            orders = [o for o in orders if o.status == wanted]
        if search and search.strip():
            needle = search.strip().lower()
            orders = [
                o for o in orders
                if needle in o.number.lower() or needle in o.customer_ref.lower()
            ]
        return sorted(orders, key=lambda o: (o.ordered_at, o.id or 0), reverse=True)

    def get_stock_ledger(self, product_id: str) -> list[LedgerEntry]:
        if self._product_repo.get_by_id(product_id) is None:
            raise ProductNotFoundError(product_id)
        return self._ledger.entries_for(product_id)

    # --- Internal helpers -----------------------------------------------------

    def _require_order(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _save_or_compensate(self, order: Order, changes: list[tuple[str, int]]) -> None:
        """Persist *order*; if that fails, give back the stock just moved.

        Must be called while the product locks for *changes* are held.
        """
        try:
            self._order_repo.save(order)
        except PersistenceError:
            if changes:
                logger.error(
                    "order_save_failed",
                    extra={"order_number": order.number},
                    exc_info=True,
                )
                reversal = [(pid, -delta) for pid, delta in changes]
                self._stock.adjust_many(
                    reversal, f"Reversal of unsaved {_stock_cause(order, order.status)}"
                )
            raise
