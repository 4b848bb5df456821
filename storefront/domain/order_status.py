# storefront/domain/order_status.py
from enum import Enum

from storefront.domain.errors import InvalidStatusTransition, ValidationFailed


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return list(OrderStatus).index(self)

    @classmethod
    def parse(cls, value: str) -> "OrderStatus":
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationFailed(f"Unknown order status '{value}' (allowed: {allowed})")


def check_transition(current: str, target: str) -> OrderStatus:
    """Return the parsed target status if moving there from current goes forward."""
    cur = OrderStatus.parse(current)
    new = OrderStatus.parse(target)
    if new.rank <= cur.rank:
        raise InvalidStatusTransition(
            f"Order status can only move forward ({cur.value} -> {new.value} rejected)"
        )
    return new
