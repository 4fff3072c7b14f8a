"""Application service: Remove Product use case.

A product that any order line references, or that has stock history,
is soft-deactivated instead of deleted so history stays resolvable and
the ledger stays append-only.
"""

from __future__ import annotations

from stockflow.application.dto import ProductRemovalDTO
from stockflow.domain.exceptions import ProductNotFoundError
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.locks import KeyedLockRegistry, product_key
from stockflow.domain.service.stock_ledger import StockLedger
from stockflow.logging_config import get_logger

logger = get_logger("application.remove_product")


class RemoveProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        ledger: StockLedger,
        locks: KeyedLockRegistry,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._ledger = ledger
        self._locks = locks

    def handle(self, product_id: str) -> ProductRemovalDTO:
        with self._locks.hold([product_key(product_id)]):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            has_history = (
                self._order_repo.references_product(product_id)
                or bool(self._ledger.entries_for(product_id))
            )
            if has_history:
                product.deactivate()
                self._product_repo.save(product)
                logger.info(
                    "product_deactivated",
                    extra={"product_id": product_id, "sku": product.sku},
                )
                return ProductRemovalDTO(product_id=product_id, deleted=False)

            self._product_repo.delete(product_id)
            logger.info("product_deleted", extra={"product_id": product_id, "sku": product.sku})
            return ProductRemovalDTO(product_id=product_id, deleted=True)
