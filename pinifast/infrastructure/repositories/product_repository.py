"""
SQLAlchemy implementation of the Product repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from pinifast.domain.models.product import Product
from pinifast.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product]):
    """Product repository implementation using SQLAlchemy."""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def find_by_sku(self, sku: str) -> Optional[Product]:
        return self.find_one(sku=sku)

    def find_by_category(self, category: str) -> List[Product]:
        return self.find_by_query(category=category)

    def find_in_stock(self) -> List[Product]:
        return self.find_by_query(in_stock=True)
