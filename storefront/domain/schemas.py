# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterIn(BaseModel):
    """Schema for self-registration."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["customer", "seller"] = "customer"


class SellerCreate(BaseModel):
    """Schema for an admin creating a seller account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)


class LoginIn(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class SessionUser(BaseModel):
    """The identity stored in the session after login."""

    id: int
    role: str
    name: str


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    image: str | None = None
    stock: int
    owner_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class HomeOut(BaseModel):
    products: List[ProductOut]
    featured: List[ProductOut]


class CartLineOut(BaseModel):
    product_id: int
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class CartOut(BaseModel):
    """Schema for the session cart (response)."""

    items: List[CartLineOut]
    total: Decimal
    item_count: int


class QuantityIn(BaseModel):
    # non-positive values are accepted and clamped to 1 by the cart
    quantity: int


class OrderLineOut(BaseModel):
    product_id: int | None
    name: str
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    status: str
    total: Decimal
    created_at: datetime
    lines: List[OrderLineOut]

    model_config = ConfigDict(from_attributes=True)


class StatusIn(BaseModel):
    status: str = Field(..., min_length=1)


class SellerDashboardOut(BaseModel):
    products: List[ProductOut]
    orders: List[OrderOut]


class AdminDashboardOut(BaseModel):
    users: List[UserRead]
    seller_count: int
    customer_count: int
