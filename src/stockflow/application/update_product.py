"""Application service: Update Product use case.

Name, price, minimum stock and status are editable. The SKU is the
immutable business key and the on-hand quantity only moves through the
stock accessor, so neither is accepted here.
"""

from __future__ import annotations

from stockflow.application.dto import ProductDTO
from stockflow.domain.exceptions import ProductNotFoundError, ValidationError
from stockflow.domain.model.product import ProductStatus
from stockflow.domain.model.value_objects import Money
from stockflow.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        minimum_stock: int | None = None,
        status: str | None = None,
    ) -> ProductDTO:
        """Update a product's catalog fields.

        A price change does NOT affect existing orders; they captured a
        price snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if name is not None:
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price))
        if minimum_stock is not None:
            product.update_minimum_stock(minimum_stock)
        if status is not None:
            try:
                new_status = ProductStatus(status.strip().lower())
            except ValueError:
                raise ValidationError(
                    f"Unknown product status '{status}' (expected active or inactive)"
                ) from None
            if new_status == ProductStatus.ACTIVE:
                product.activate()
            else:
                product.deactivate()

        self._product_repo.save(product)
        return ProductDTO.from_product(self._product_repo.get_by_id(product_id))
