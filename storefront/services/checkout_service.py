# storefront/services/checkout_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.cart import Cart
from storefront.domain.errors import EmptyCart, CheckoutFailed, NotFound, Unauthorized
from storefront.domain.order_status import OrderStatus
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import order_view
from storefront.services.session_context import SessionContext
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Turns the session cart into a persisted order.

    The header, every line and the emptied cart row are written in one
    transaction: flushed one by one, committed once. Any failure rolls the
    whole thing back and the stored cart stays as it was, so the user can
    simply retry. Once the commit went through, a replayed or concurrent
    checkout for the same session reads the cleared cart.
    """

    def __init__(
        self,
        db: Session,
        ctx: SessionContext,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.ctx = ctx
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def _drop_unavailable(self, session_id: str, cart: Cart) -> None:
        """Removes lines whose product left the catalog, then reports them."""
        missing = [line for line in cart.snapshot() if self.products.get_product(line.product_id) is None]
        if not missing:
            return

        for line in missing:
            cart.remove_item(line.product_id)
        self.carts.save(session_id, cart)
        self.carts.commit()

        names = ", ".join(line.name or f"#{line.product_id}" for line in missing)
        logger.info(f"Session {session_id} cart dropped unavailable products: {names}")
        raise NotFound(f"No longer available and removed from your cart: {names}")

    def checkout(self) -> Dict[str, Any]:
        user = self.ctx.current_user
        if user is None:
            raise Unauthorized("Login required to check out")

        session_id = self.ctx.session_id
        with self.lock_service.session_lock(session_id):
            cart = self.carts.load(session_id)
            if cart.is_empty():
                raise EmptyCart("Cart is empty")

            self._drop_unavailable(session_id, cart)

            lines = cart.snapshot()
            total = sum((line.unit_price * line.quantity for line in lines), Decimal("0.00"))

            logger.info(f"Checkout for user {user.id}: {len(lines)} lines, total {total}")

            try:
                order = self.repo.create_order(
                    user_id=user.id,
                    total=total,
                    status=OrderStatus.PENDING.value,
                )
                self.repo.create_order_lines(order.id, lines)
                #the emptied cart becomes visible together with the order, never before
                self.carts.save(session_id, Cart())
                self.repo.commit()
            except SQLAlchemyError as e:
                self.repo.rollback()
                logger.error(f"Checkout for user {user.id} rolled back: {e}")
                raise CheckoutFailed("Could not place the order, please try again") from e
            except BaseException:
                #timeouts, cancellation: nothing may stay half-written
                self.repo.rollback()
                raise

            cart.clear()

        logger.info(f"Order {order.id} created for user {user.id}")

        try:
            self.notification_service.send_order_notification(user.id, order.id)
        except Exception as e:
            logger.warning(f"Order {order.id} notification not dispatched: {e}")

        return order_view(self.repo.get_order(order.id))
