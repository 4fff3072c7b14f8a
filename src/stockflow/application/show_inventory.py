"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from stockflow.application.dto import ProductDTO
from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.product import ProductStatus
from stockflow.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        low_stock_only: bool = False,
        status: str | None = None,
        search: str | None = None,
    ) -> list[ProductDTO]:
        """Products sorted by SKU.

        ``low_stock_only`` keeps those at or below their minimum stock,
        ``status`` keeps one status and ``search`` matches name or SKU
        case-insensitively.
        """
        products = sorted(self._product_repo.list_all(), key=lambda p: p.sku)
        if low_stock_only:
            products = [p for p in products if p.is_low_stock]
        if status is not None:
            try:
                wanted = ProductStatus(status.strip().lower())
            except ValueError:
                raise ValidationError(
                    f"Unknown product status '{status}' (expected active or inactive)"
                ) from None
            products = [p for p in products if p.status == wanted]
        if search and search.strip():
            needle = search.strip().lower()
            products = [
                p for p in products
                if needle in p.name.lower() or needle in p.sku.lower()
            ]
        return [ProductDTO.from_product(p) for p in products]
