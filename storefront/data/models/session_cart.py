#storefront/data/models/session_cart.py
from sqlalchemy import Column, String, DateTime, JSON

from storefront.data.database import Base


class SessionCartModel(Base):
    __tablename__ = "session_carts"

    session_id = Column(String(64), primary_key=True)

    #lines as written by Cart.to_data(), prices kept as strings
    items = Column(JSON, nullable=False, default=list)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
