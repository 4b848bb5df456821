# storefront/services/order_service.py
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import NotFound, Unauthorized
from storefront.domain.order_status import check_transition
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.services.role_gate import RoleGate
from storefront.services.session_context import SessionContext
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def order_view(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "status": order.status,
        "total": order.total,
        "created_at": order.created_at,
        "lines": [
            {
                "product_id": line.product_id,
                "name": line.name,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
            }
            for line in order.lines
        ],
    }


class OrderService:
    """
    Order queries and status changes.
    The total is never recomputed here; only status moves, and only forward.
    """

    def __init__(self, db: Session, ctx: SessionContext):
        self.repo = OrderRepo(db)
        self.ctx = ctx
        self.notification_service = NotificationService()

    def list_my_orders(self) -> List[Dict[str, Any]]:
        user = self.ctx.require_user()
        return [order_view(o) for o in self.repo.list_for_user(user.id)]

    def list_seller_orders(self) -> List[Dict[str, Any]]:
        user = self.ctx.require_user()
        return [order_view(o) for o in self.repo.list_for_seller(user.id)]

    def _can_manage(self, order: OrderModel) -> bool:
        user = self.ctx.current_user
        if user is None:
            return False
        if user.role == RoleGate.ADMIN:
            return True
        return user.role == "seller" and self.repo.order_has_seller_product(order.id, user.id)

    def get_order(self, order_id: int) -> Dict[str, Any]:
        user = self.ctx.require_user()

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if order.user_id != user.id and not self._can_manage(order):
            raise Unauthorized("No access to this order")

        return order_view(order)

    def update_status(self, order_id: int, status: str, required_role: str) -> Dict[str, Any]:
        """
        Move an order forward (pending -> paid -> shipped -> completed).

        Sellers may only touch orders that contain one of their products.
        """
        self.ctx.require_user()
        if not RoleGate.authorize(self.ctx, required_role):
            raise Unauthorized(f"Role '{required_role}' required")

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if not self._can_manage(order):
            raise Unauthorized("No access to this order")

        new_status = check_transition(order.status, status)
        previous = order.status
        updated = self.repo.update_order_status(order, new_status.value)

        logger.info(f"Order {order_id} status {previous} -> {updated.status}")

        try:
            self.notification_service.send_status_notification(updated.user_id, updated.id, updated.status)
        except Exception as e:
            logger.warning(f"Order {order_id} status notification not dispatched: {e}")

        return order_view(updated)
