from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="customer")  # admin, seller, customer

    products = relationship("ProductModel", back_populates="owner")
    orders = relationship("OrderModel", back_populates="user")
