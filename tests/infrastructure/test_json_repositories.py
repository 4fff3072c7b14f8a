"""Tests for the JSON-file repositories, against a temporary directory."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from stockflow.domain.exceptions import PersistenceError, ProductNotFoundError
from stockflow.domain.model.order import Order, OrderLine, OrderStatus
from stockflow.domain.model.product import ProductStatus
from stockflow.domain.model.stock_ledger import StockDirection
from stockflow.domain.model.value_objects import Money, Quantity
from stockflow.infrastructure.persistence.json_file import JsonFile
from stockflow.infrastructure.persistence.json_ledger_repository import JsonLedgerRepository
from stockflow.infrastructure.persistence.json_order_repository import JsonOrderRepository
from stockflow.infrastructure.persistence.json_product_repository import JsonProductRepository
from tests.fakes import make_product

WHEN = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _order(number="ORD-000001") -> Order:
    line = OrderLine(
        product_id="1",
        sku="WID-001",
        product_name="Widget",
        quantity=Quantity(2),
        unit_price=Money.of("15.00"),
    )
    return Order(
        id=None,
        number=number,
        customer_ref="ACME-42",
        created_by="alice",
        lines=[line],
        total_amount=Money.of("30.00"),
        notes="fragile",
        ordered_at=WHEN,
    )


class TestJsonFile:

    def test_creates_missing_file_and_directories(self, tmp_path):
        path = tmp_path / "nested" / "doc.json"
        doc = JsonFile(path, empty=lambda: {"items": []})
        assert path.exists()
        assert doc.read() == {"items": []}

    def test_updating_discards_changes_on_error(self, tmp_path):
        doc = JsonFile(tmp_path / "doc.json", empty=lambda: {"n": 0})
        with pytest.raises(RuntimeError):
            with doc.updating() as data:
                data["n"] = 5
                raise RuntimeError("abort")
        assert doc.read() == {"n": 0}

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        path = tmp_path / "doc.json"
        doc = JsonFile(path, empty=dict)
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError, match="Cannot read"):
            doc.read()

    def test_no_temporary_file_left_behind(self, tmp_path):
        doc = JsonFile(tmp_path / "doc.json", empty=dict)
        doc.write({"a": 1})
        assert sorted(p.name for p in tmp_path.iterdir()) == ["doc.json"]


class TestJsonProductRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product("1", "WID-001", "Widget", "15.50", quantity=4, minimum_stock=2)
        product.deactivate()
        repo.save(product)

        loaded = JsonProductRepository(tmp_path / "products.json").get_by_id("1")
        assert loaded == product
        assert loaded.price.amount == Decimal("15.50")
        assert loaded.status == ProductStatus.INACTIVE

    def test_save_keeps_stored_quantity(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", quantity=0))
        repo.update_quantity("1", 9)

        stale = make_product("1", name="Renamed", quantity=0)
        repo.save(stale)

        loaded = repo.get_by_id("1")
        assert (loaded.name, loaded.quantity) == ("Renamed", 9)

    def test_lookup_by_sku_is_case_insensitive(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", "WID-001"))
        assert repo.get_by_sku("wid-001").id == "1"
        assert repo.get_by_sku("NOPE") is None

    def test_ids_are_sequential(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        assert [repo.next_id(), repo.next_id()] == ["1", "2"]

    def test_update_quantity_unknown_product(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        with pytest.raises(ProductNotFoundError):
            repo.update_quantity("7", 1)

    def test_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1"))
        repo.delete("1")
        assert repo.list_all() == []


class TestJsonOrderRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        assert order.id == 1

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(1)
        assert loaded == order
        assert loaded.ordered_at == WHEN
        assert loaded.lines[0].unit_price == Money.of("15.00")

    def test_update_in_place(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        order.status = OrderStatus.COMPLETED
        repo.save(order)

        [stored] = repo.list_all()
        assert stored.status == OrderStatus.COMPLETED

    def test_numbers_survive_deletion(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        assert repo.next_number() == 1
        order = _order()
        repo.save(order)
        repo.delete(order.id)
        assert repo.next_number() == 2

    def test_references_product(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(_order())
        assert repo.references_product("1")
        assert not repo.references_product("2")


class TestJsonLedgerRepository:

    def test_append_and_filter(self, tmp_path):
        repo = JsonLedgerRepository(tmp_path / "stock_ledger.json")
        repo.append("1", StockDirection.IN, 5, "Initial stock", WHEN)
        repo.append("2", StockDirection.IN, 3, "Initial stock", WHEN)
        third = repo.append("1", StockDirection.ADJUSTMENT, -2, "Stock take", WHEN)

        assert third.id == 3
        reloaded = JsonLedgerRepository(tmp_path / "stock_ledger.json")
        entries = reloaded.list_for_product("1")
        assert [(e.direction, e.quantity) for e in entries] == [
            (StockDirection.IN, 5),
            (StockDirection.ADJUSTMENT, -2),
        ]
        assert entries[1].created_at == WHEN
        assert len(reloaded.list_all()) == 3
