"""Product aggregate.

Products live independently of orders. Price, name, minimum stock and
status are ordinary mutations on the aggregate; the on-hand ``quantity``
is not. It is written only by the ProductStockAccessor, through the
repository's ``update_quantity``, so every change lands in the stock
ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.value_objects import Money


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Product:
    """A product in the catalog.

    ``sku`` is the immutable business key. ``quantity`` is never negative.
    """

    id: str
    sku: str
    name: str
    price: Money
    quantity: int = 0
    minimum_stock: int = 0
    status: ProductStatus = ProductStatus.ACTIVE

    @staticmethod
    def create(
        product_id: str,
        sku: str,
        name: str,
        price: Money,
        quantity: int = 0,
        minimum_stock: int = 0,
    ) -> Product:
        """Create a new product, enforcing all invariants.

        The product starts at zero on hand; the initial ``quantity`` is
        applied afterwards by the stock accessor so that it is recorded
        in the ledger.
        """
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        _require_non_negative("Initial quantity", quantity)
        _require_non_negative("Minimum stock", minimum_stock)
        return Product(
            id=product_id,
            sku=sku.strip(),
            name=name.strip(),
            price=price,
            quantity=0,
            minimum_stock=minimum_stock,
        )

    # --- Mutations ------------------------------------------------------------

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def update_minimum_stock(self, minimum_stock: int) -> None:
        _require_non_negative("Minimum stock", minimum_stock)
        self.minimum_stock = minimum_stock

    def activate(self) -> None:
        self.status = ProductStatus.ACTIVE

    def deactivate(self) -> None:
        self.status = ProductStatus.INACTIVE

    # --- Queries --------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.minimum_stock


def _require_non_negative(label: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
