"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from stockflow.domain.exceptions import ProductNotFoundError
from stockflow.domain.model.product import Product, ProductStatus
from stockflow.domain.model.value_objects import Money
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=lambda: {"sequence": 0, "products": []})

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        with self._file.updating() as doc:
            doc["sequence"] += 1
            return str(doc["sequence"])

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.read()["products"]:
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._file.read()["products"]:
            if raw["sku"].lower() == sku.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.read()["products"]]

    def save(self, product: Product) -> None:
        with self._file.updating() as doc:
            records = doc["products"]
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    # quantity is owned by update_quantity
                    updated = self._to_raw(product)
                    updated["quantity"] = raw["quantity"]
                    records[i] = updated
                    break
            else:
                records.append(self._to_raw(product))

    def update_quantity(self, product_id: str, quantity: int) -> None:
        with self._file.updating() as doc:
            for raw in doc["products"]:
                if raw["id"] == product_id:
                    raw["quantity"] = quantity
                    break
            else:
                raise ProductNotFoundError(product_id)

    def delete(self, product_id: str) -> None:
        with self._file.updating() as doc:
            doc["products"] = [r for r in doc["products"] if r["id"] != product_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "sku": product.sku,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "quantity": product.quantity,
            "minimum_stock": product.minimum_stock,
            "status": product.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            sku=raw["sku"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            quantity=raw["quantity"],
            minimum_stock=raw.get("minimum_stock", 0),
            status=ProductStatus(raw.get("status", "active")),
        )
