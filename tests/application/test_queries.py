"""Integration tests for the read-only use cases."""

import pytest

from stockflow.application.reconcile_stock import ReconcileStockHandler
from stockflow.application.show_inventory import ShowInventoryHandler
from stockflow.application.show_stock_ledger import ShowStockLedgerHandler
from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.order import OrderStatus
from stockflow.domain.model.value_objects import Quantity
from stockflow.domain.service.order_builder import LineRequest
from tests.fakes import build_core, make_product


def _core():
    return build_core(
        [
            (make_product("1", "WID-001", "Widget", minimum_stock=2), 5),
            (make_product("2", "BOLT-01", "Bolt", "0.25", minimum_stock=100), 40),
        ]
    )


class TestShowInventory:

    def test_sorted_by_sku(self):
        core = _core()
        skus = [p.sku for p in ShowInventoryHandler(core.product_repo).handle()]
        assert skus == ["BOLT-01", "WID-001"]

    def test_low_stock_only(self):
        core = _core()
        low = ShowInventoryHandler(core.product_repo).handle(low_stock_only=True)
        assert [p.sku for p in low] == ["BOLT-01"]

    def test_low_stock_includes_exactly_at_minimum(self):
        core = _core()
        core.stock.adjust("1", -3, "sale")
        low = ShowInventoryHandler(core.product_repo).handle(low_stock_only=True)
        assert {p.sku for p in low} == {"BOLT-01", "WID-001"}

    def test_search_matches_name_or_sku_case_insensitively(self):
        core = _core()
        handler = ShowInventoryHandler(core.product_repo)
        assert [p.sku for p in handler.handle(search="widg")] == ["WID-001"]
        assert [p.sku for p in handler.handle(search="bolt-")] == ["BOLT-01"]
        assert handler.handle(search="nothing like it") == []

    def test_status_filter(self):
        core = _core()
        product = core.product_repo.get_by_id("2")
        product.deactivate()
        core.product_repo.save(product)

        handler = ShowInventoryHandler(core.product_repo)
        assert [p.sku for p in handler.handle(status="inactive")] == ["BOLT-01"]
        assert [p.sku for p in handler.handle(status="Active")] == ["WID-001"]

    def test_unknown_status_filter(self):
        core = _core()
        with pytest.raises(ValidationError, match="Unknown product status"):
            ShowInventoryHandler(core.product_repo).handle(status="retired")


class TestShowStockLedger:

    def test_entries_for_product(self):
        core = _core()
        order = core.lifecycle.create_order(
            "ACME", [LineRequest("1", Quantity(2))], "alice", OrderStatus.COMPLETED
        )
        entries = ShowStockLedgerHandler(core.lifecycle).handle("1")
        assert [(e.direction, e.signed_delta) for e in entries] == [("in", 5), ("out", -2)]
        assert entries[1].cause == f"order {order.number} completed"


class TestReconcileStock:

    def test_all_balanced(self):
        core = _core()
        core.stock.adjust("2", -10, "sale")
        summary = ReconcileStockHandler(core.product_repo, core.stock).handle()
        assert summary.all_balanced
        assert [r.product_id for r in summary.reports] == ["1", "2"]

    def test_single_product_out_of_balance(self):
        core = _core()
        core.product_repo.update_quantity("2", 39)
        summary = ReconcileStockHandler(core.product_repo, core.stock).handle("2")
        assert not summary.all_balanced
        [report] = summary.reports
        assert (report.on_hand, report.ledger_balance) == (39, 40)
