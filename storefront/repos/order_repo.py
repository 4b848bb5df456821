# storefront/repos/order_repo.py
from decimal import Decimal
from typing import Iterable, List
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.data.models.product import ProductModel
from storefront.domain.cart import CartLine


class OrderRepo:
    """
    Order header and line persistence.

    create_order and create_order_lines only flush; the caller owns the
    transaction and decides when to commit or roll back.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_order(self, user_id: int, total: Decimal, status: str) -> OrderModel:
        order = OrderModel(user_id=user_id, total=total, status=status)
        self.db.add(order)
        self.db.flush()
        return order

    def create_order_lines(self, order_id: int, lines: Iterable[CartLine]) -> List[OrderLineModel]:
        rows = [
            OrderLineModel(
                order_id=order_id,
                product_id=line.product_id,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in lines
        ]
        self.db.add_all(rows)
        self.db.flush()
        return rows

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.lines))
        ).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .options(selectinload(OrderModel.lines))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def list_for_seller(self, seller_id: int) -> List[OrderModel]:
        seller_orders = (
            select(OrderLineModel.order_id)
            .join(ProductModel, ProductModel.id == OrderLineModel.product_id)
            .where(ProductModel.owner_id == seller_id)
        )
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.id.in_(seller_orders))
                .options(selectinload(OrderModel.lines))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )

    def order_has_seller_product(self, order_id: int, seller_id: int) -> bool:
        found = self.db.execute(
            select(OrderLineModel.id)
            .join(ProductModel, ProductModel.id == OrderLineModel.product_id)
            .where(OrderLineModel.order_id == order_id, ProductModel.owner_id == seller_id)
            .limit(1)
        ).first()
        return found is not None

    def update_order_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        self.db.commit()
        self.db.refresh(order)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
