"""Product service — catalog CRUD and stock bookkeeping."""

from typing import List, Optional

import structlog

from pinifast.core.exceptions import EntityNotFoundException, ValidationException
from pinifast.domain.models.product import Product
from pinifast.domain.schemas.product import ProductCreate, ProductUpdate
from pinifast.infrastructure.repositories.product_repository import SQLAlchemyProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    def __init__(self, products: SQLAlchemyProductRepository):
        self.products = products

    def find_all(self) -> List[Product]:
        products = self.products.find_all()
        logger.debug("Found products", count=len(products))
        return products

    def find_by_id(self, product_id: str) -> Optional[Product]:
        if not product_id:
            raise ValidationException("Product ID is required")
        return self.products.find_by_id(product_id)

    def get_by_id(self, product_id: str) -> Product:
        product = self.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundException("Product not found")
        return product

    def find_by_sku(self, sku: str) -> Optional[Product]:
        if not sku:
            raise ValidationException("SKU is required")
        return self.products.find_by_sku(sku)

    def find_by_category(self, category: str) -> List[Product]:
        if not category:
            raise ValidationException("Category is required")
        return self.products.find_by_category(category)

    def find_in_stock(self) -> List[Product]:
        return self.products.find_in_stock()

    def create(self, data: ProductCreate) -> Product:
        if self.find_by_sku(data.sku):
            raise ValidationException("Product with this SKU already exists")

        product = self.products.create({
            "name": data.name,
            "description": data.description,
            "price": data.price,
            "category": data.category,
            "sku": data.sku,
            "stock_quantity": data.stock_quantity,
            "in_stock": data.stock_quantity > 0,
            "image_url": data.image_url,
        })
        logger.info("Product created", product_id=product.id, name=product.name)
        return product

    def update(self, product_id: str, data: ProductUpdate) -> Product:
        existing = self.get_by_id(product_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        if "sku" in changes and changes["sku"] != existing.sku:
            conflict = self.find_by_sku(changes["sku"])
            if conflict and conflict.id != product_id:
                raise ValidationException("Product with this SKU already exists")

        if "stock_quantity" in changes:
            changes["in_stock"] = changes["stock_quantity"] > 0

        updated = self.products.update(product_id, changes)
        if updated is None:
            raise EntityNotFoundException("Product not found")

        logger.info("Product updated", product_id=updated.id, name=updated.name)
        return updated

    def delete(self, product_id: str) -> bool:
        name = self.get_by_id(product_id).name

        deleted = self.products.delete(product_id)
        if deleted:
            logger.info("Product deleted", product_id=product_id, name=name)
        return deleted

    def update_stock(self, product_id: str, quantity: int) -> Product:
        if quantity < 0:
            raise ValidationException("Stock quantity cannot be negative")
        return self.update(product_id, ProductUpdate(stock_quantity=quantity))

    def reduce_stock(self, product_id: str, amount: int) -> Product:
        product = self.get_by_id(product_id)
        return self.update_stock(product_id, max(0, product.stock_quantity - amount))
