"""Application service: Add Product use case."""

from __future__ import annotations

from stockflow.application.dto import AddProductRequest, ProductDTO
from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.product import Product
from stockflow.domain.model.value_objects import Money
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.service.locks import KeyedLockRegistry, sku_key
from stockflow.domain.service.product_stock_accessor import ProductStockAccessor
from stockflow.logging_config import get_logger

logger = get_logger("application.add_product")


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        stock: ProductStockAccessor,
        locks: KeyedLockRegistry,
    ) -> None:
        self._product_repo = product_repo
        self._stock = stock
        self._locks = locks

    def handle(self, request: AddProductRequest) -> ProductDTO:
        """Add a new product to the catalog.

        The product is saved at zero on hand; its opening quantity is then
        booked through the stock accessor so it shows up in the ledger as
        ``Initial stock``. If that booking fails the new product is deleted
        again, so a failed add leaves nothing behind.

        The SKU check and the save run under the SKU's lock, so two
        concurrent adds of the same SKU cannot both succeed.
        """
        sku = (request.sku or "").strip()
        with self._locks.hold([sku_key(sku)]):
            if sku and self._product_repo.get_by_sku(sku) is not None:
                raise ValidationError(f"Product with SKU '{sku}' already exists")

            product = Product.create(
                product_id=self._product_repo.next_id(),
                sku=request.sku,
                name=request.name,
                price=Money.of(request.price),
                quantity=request.quantity,
                minimum_stock=request.minimum_stock,
            )
            self._product_repo.save(product)
            try:
                self._stock.receive_initial(product.id, request.quantity)
            except Exception:
                self._product_repo.delete(product.id)
                logger.error(
                    "product_create_rolled_back",
                    extra={"product_id": product.id, "sku": product.sku},
                    exc_info=True,
                )
                raise

        logger.info(
            "product_created",
            extra={
                "product_id": product.id,
                "sku": product.sku,
                "initial_quantity": request.quantity,
            },
        )
        return ProductDTO.from_product(self._product_repo.get_by_id(product.id))
