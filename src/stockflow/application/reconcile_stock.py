"""Application service: Reconcile Stock use case (query).

Checks that each product's ledger history adds up to its on-hand
quantity.
"""

from __future__ import annotations

from stockflow.application.dto import ReconciliationDTO, ReconciliationSummaryDTO
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor
from stockflow.logging_config import get_logger

logger = get_logger("application.reconcile_stock")


class ReconcileStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        stock: ProductStockAccessor,
    ) -> None:
        self._product_repo = product_repo
        self._stock = stock

    def handle(self, product_id: str | None = None) -> ReconciliationSummaryDTO:
        if product_id is not None:
            product_ids = [product_id]
        else:
            product_ids = sorted(p.id for p in self._product_repo.list_all())

        reports = []
        for pid in product_ids:
            report = self._stock.reconcile(pid)
            if not report.balanced:
                logger.warning(
                    "stock_out_of_balance",
                    extra={
                        "product_id": report.product_id,
                        "on_hand": report.on_hand,
                        "ledger_balance": report.ledger_balance,
                    },
                )
            reports.append(
                ReconciliationDTO(
                    product_id=report.product_id,
                    sku=report.sku,
                    on_hand=report.on_hand,
                    ledger_balance=report.ledger_balance,
                    balanced=report.balanced,
                )
            )
        return ReconciliationSummaryDTO(reports=reports)
