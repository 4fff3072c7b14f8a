"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockflow.domain.service.locks import KeyedLockRegistry
from stockflow.domain.service.order_lifecycle import OrderLifecycleController
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor
from stockflow.domain.service.stock_ledger import StockLedger
from stockflow.infrastructure.config import Settings
from stockflow.infrastructure.persistence.json_ledger_repository import (
    JsonLedgerRepository,
)
from stockflow.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from stockflow.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@dataclass(frozen=True)
class Services:
    settings: Settings
    product_repo: JsonProductRepository
    order_repo: JsonOrderRepository
    ledger_repo: JsonLedgerRepository
    locks: KeyedLockRegistry
    ledger: StockLedger
    stock: ProductStockAccessor
    lifecycle: OrderLifecycleController


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def ledger_repository(settings: Settings) -> JsonLedgerRepository:
    return JsonLedgerRepository(settings.data_dir / "stock_ledger.json")


def build_services(settings: Settings) -> Services:
    """One shared set of repositories and locks per process."""
    product_repo = product_repository(settings)
    order_repo = order_repository(settings)
    ledger_repo = ledger_repository(settings)
    locks = KeyedLockRegistry()
    ledger = StockLedger(ledger_repo)
    stock = ProductStockAccessor(product_repo, ledger, locks)
    lifecycle = OrderLifecycleController(order_repo, product_repo, stock, ledger, locks)
    return Services(
        settings=settings,
        product_repo=product_repo,
        order_repo=order_repo,
        ledger_repo=ledger_repo,
        locks=locks,
        ledger=ledger,
        stock=stock,
        lifecycle=lifecycle,
    )
