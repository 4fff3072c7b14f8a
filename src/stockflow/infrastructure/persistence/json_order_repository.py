"""JSON-file-backed implementation of OrderRepository.

The document keeps the order-number counter next to the orders so a
number, once handed out, is never handed out again.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from stockflow.domain.model.order import Order, OrderLine, OrderStatus
from stockflow.domain.model.value_objects import Money, Quantity
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.infrastructure.persistence.json_file import JsonFile


def _empty_document() -> dict:
    return {"last_id": 0, "last_number": 0, "orders": []}


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=_empty_document)

    # --- OrderRepository interface --------------------------------------------

    def next_number(self) -> int:
        with self._file.updating() as doc:
            doc["last_number"] += 1
            return doc["last_number"]

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read()["orders"]:
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.read()["orders"]]

    def save(self, order: Order) -> None:
        with self._file.updating() as doc:
            if order.id is None:
                doc["last_id"] += 1
                raw = self._to_raw(order)
                raw["id"] = doc["last_id"]
                doc["orders"].append(raw)
                assigned = doc["last_id"]
            else:
                # Upsert: replace if exists, otherwise append
                for i, existing in enumerate(doc["orders"]):
                    if existing["id"] == order.id:
                        doc["orders"][i] = self._to_raw(order)
                        break
                else:
                    doc["orders"].append(self._to_raw(order))
                assigned = order.id
        order.id = assigned

    def delete(self, order_id: int) -> None:
        with self._file.updating() as doc:
            doc["orders"] = [o for o in doc["orders"] if o["id"] != order_id]

    def references_product(self, product_id: str) -> bool:
        return any(
            line["product_id"] == product_id
            for raw in self._file.read()["orders"]
            for line in raw["lines"]
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "number": order.number,
            "customer_ref": order.customer_ref,
            "created_by": order.created_by,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "notes": order.notes,
            "ordered_at": order.ordered_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "sku": line.sku,
                    "product_name": line.product_name,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=line["product_id"],
                sku=line["sku"],
                product_name=line["product_name"],
                quantity=Quantity(line["quantity"]),
                unit_price=Money(Decimal(line["unit_price"]), line.get("currency", "USD")),
            )
            for line in raw["lines"]
        ]
        return Order(
            id=raw["id"],
            number=raw["number"],
            customer_ref=raw["customer_ref"],
            created_by=raw["created_by"],
            lines=lines,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            notes=raw.get("notes", ""),
            ordered_at=datetime.fromisoformat(raw["ordered_at"]),
        )
