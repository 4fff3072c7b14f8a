"""End-to-end tests of the click CLI over real JSON files."""

import json

import pytest
from click.testing import CliRunner

from stockflow.infrastructure.cli.main import cli
from stockflow.logging_config import reset_logging


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args):
        # each invocation is a fresh process as far as logging is concerned
        reset_logging()
        return runner.invoke(
            cli,
            ["--data-dir", str(tmp_path), "--actor", "clerk", *args],
            env={"STOCKFLOW_LOG_LEVEL": "WARNING"},
        )

    return invoke


@pytest.fixture
def stocked(run):
    assert run("product", "add", "--sku", "WID-001", "--name", "Widget",
               "--price", "15.00", "--quantity", "5", "--min-stock", "2").exit_code == 0
    assert run("product", "add", "--sku", "GAD-001", "--name", "Gadget",
               "--price", "25.00", "--quantity", "10").exit_code == 0
    return run


def test_product_add_and_list(stocked):
    result = stocked("product", "list")
    assert result.exit_code == 0, result.output
    assert "WID-001" in result.output
    assert "GAD-001" in result.output


def test_duplicate_sku_is_an_error(stocked):
    result = stocked("product", "add", "--sku", "WID-001", "--name", "Again", "--price", "1")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_order_lifecycle_round_trip(stocked, tmp_path):
    result = stocked("order", "create", "--customer", "ACME-42", "--items", "1:3")
    assert result.exit_code == 0, result.output
    assert "Order ORD-000001 created  (status=pending)" in result.output
    assert "by clerk" in result.output

    result = stocked("order", "status", "--id", "1", "--to", "completed")
    assert result.exit_code == 0, result.output
    assert "Order ORD-000001 is now completed." in result.output

    products = json.loads((tmp_path / "products.json").read_text())["products"]
    assert products[0]["quantity"] == 2

    result = stocked("product", "list", "--low-stock")
    assert "WID-001" in result.output
    assert "LOW" in result.output

    result = stocked("order", "create", "--customer", "BOLT-7", "--items", "1:3")
    assert result.exit_code == 1
    assert "Insufficient stock for WID-001 (requested 3, available 2)" in result.output

    result = stocked("order", "status", "--id", "1", "--to", "cancelled")
    assert result.exit_code == 0, result.output

    result = stocked("stock", "ledger", "--product", "1")
    assert "order ORD-000001 completed" in result.output
    assert "order ORD-000001 cancelled" in result.output

    result = stocked("stock", "reconcile")
    assert result.exit_code == 0, result.output
    assert "MISMATCH" not in result.output


def test_invalid_transition_reported(stocked):
    stocked("order", "create", "--customer", "ACME", "--items", "2:1", "--status", "completed")
    result = stocked("order", "status", "--id", "1", "--to", "pending")
    assert result.exit_code == 1
    assert "Invalid status transition from completed to pending" in result.output


def test_malformed_items(stocked):
    result = stocked("order", "create", "--customer", "ACME", "--items", "1-3")
    assert result.exit_code == 2
    assert "ProductID:Quantity" in result.output


def test_show_edit_list_delete(stocked):
    stocked("order", "create", "--customer", "ACME", "--items", "1:1,2:2")

    result = stocked("order", "edit", "--id", "1", "--notes", "call first")
    assert result.exit_code == 0, result.output

    result = stocked("order", "show", "--id", "1")
    assert "call first" in result.output
    assert "$65.00" in result.output

    result = stocked("order", "list", "--status", "pending")
    assert "ORD-000001" in result.output

    assert stocked("order", "delete", "--id", "1").exit_code == 0
    assert "No orders found." in stocked("order", "list").output


def test_stock_adjust_and_reconcile_mismatch(stocked, tmp_path):
    result = stocked("stock", "adjust", "--product", "2", "--type", "out", "--quantity", "4")
    assert result.exit_code == 0, result.output
    assert "Product #2 now has 6 on hand." in result.output

    path = tmp_path / "products.json"
    doc = json.loads(path.read_text())
    doc["products"][1]["quantity"] = 99
    path.write_text(json.dumps(doc))

    result = stocked("stock", "reconcile", "--product", "2")
    assert result.exit_code == 1
    assert "MISMATCH" in result.output
    assert "does not reconcile" in result.output


def test_product_update_and_remove(stocked):
    result = stocked("product", "update", "--id", "2", "--price", "27.50")
    assert result.exit_code == 0, result.output

    result = stocked("product", "remove", "--id", "2")
    assert "deactivated" in result.output

    result = stocked("product", "add", "--sku", "NEW-001", "--name", "Fresh", "--price", "3")
    assert result.exit_code == 0, result.output
    result = stocked("product", "remove", "--id", "3")
    assert "Product #3 deleted." in result.output


def test_unknown_order(run):
    result = run("order", "show", "--id", "42")
    assert result.exit_code == 1
    assert "Order #42 not found" in result.output


def test_list_filters(stocked):
    stocked("order", "create", "--customer", "ACME-42", "--items", "1:1")
    stocked("order", "create", "--customer", "Bolt Supplies", "--items", "2:1")

    result = stocked("order", "list", "--search", "bolt")
    assert result.exit_code == 0, result.output
    assert "Bolt Supplies" in result.output
    assert "ACME-42" not in result.output

    stocked("product", "update", "--id", "2", "--status", "inactive")
    result = stocked("product", "list", "--status", "active", "--search", "wid")
    assert result.exit_code == 0, result.output
    assert "WID-001" in result.output
    assert "GAD-001" not in result.output
