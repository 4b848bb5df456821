#storefront/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, Numeric, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(500), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    owner = relationship("UserModel", back_populates="products")
