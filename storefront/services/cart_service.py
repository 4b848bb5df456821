from typing import Callable, Dict, Any
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from storefront.domain.cart import Cart
from storefront.domain.errors import NotFound
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.services.session_context import SessionContext
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_view(cart: Cart) -> Dict[str, Any]:
    return {
        "items": [
            {
                "product_id": line.product_id,
                "name": line.name,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "subtotal": line.subtotal,
            }
            for line in cart.snapshot()
        ],
        "total": cart.total(),
        "item_count": cart.item_count(),
    }


class CartService:
    """
    Use cases for the session cart.
    commands (add, set quantity, remove) load the stored cart, mutate it and
    write it back, all under the session lock; the query (get) only reads.
    """

    def __init__(self, db: Session, ctx: SessionContext, lock_service: LockService):
        self.products = ProductRepo(db)
        self.carts = CartRepo(db)
        self.ctx = ctx
        self.lock_service = lock_service

    #query
    def get_cart(self) -> Dict[str, Any]:
        return cart_view(self.carts.load(self.ctx.existing_session_id))

    #commands
    def _mutate(self, change: Callable[[Cart], None]) -> Cart:
        session_id = self.ctx.session_id
        with self.lock_service.session_lock(session_id):
            cart = self.carts.load(session_id)
            change(cart)
            try:
                self.carts.save(session_id, cart)
                self.carts.commit()
            except SQLAlchemyError as e:
                self.carts.rollback()
                logger.error(f"Cart for session {session_id} not saved: {e}")
                raise
        return cart

    def add_product(self, product_id: int) -> Dict[str, Any]:
        #catalog lookup happens here, the cart itself knows nothing about products
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        def change(cart: Cart) -> None:
            line = cart.add_item(product.id, product.price, product.name)
            logger.info(f"Product {product_id} in session {self.ctx.session_id} cart, quantity {line.quantity}")

        return cart_view(self._mutate(change))

    def set_quantity(self, product_id: int, quantity: int) -> Dict[str, Any]:
        def change(cart: Cart) -> None:
            if product_id not in cart:
                logger.info(f"Quantity update for product {product_id} not in cart ignored")
            cart.set_quantity(product_id, quantity)

        return cart_view(self._mutate(change))

    def remove_product(self, product_id: int) -> Dict[str, Any]:
        cart = self._mutate(lambda c: c.remove_item(product_id))

        logger.info(f"Product {product_id} removed from session {self.ctx.session_id} cart")
        return cart_view(cart)
