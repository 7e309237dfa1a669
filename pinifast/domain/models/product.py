"""Product domain model — maps to the 'products' table."""

from sqlalchemy import Boolean, Column, Float, Integer, String, Text

from pinifast.infrastructure.database import Base, EntityMixin


class Product(EntityMixin, Base):
    __tablename__ = "products"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    sku = Column(String(100), unique=True, nullable=False, index=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    image_url = Column(String(1000), nullable=True)

    def __repr__(self):
        return f"<Product {self.sku} - {self.name}>"
