"""Tests for converting the session cart into an order."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from storefront.data.database import SessionLocal
from storefront.data.models.order import OrderModel
from storefront.data.models.order_line import OrderLineModel
from storefront.domain.errors import CheckoutFailed, EmptyCart, NotFound, Unauthorized
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.session_context import SessionContext


def _count(db, model):
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def _stored_cart(db, ctx):
    return CartRepo(db).load(ctx.session_id)


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id):
        self.sent.append((user_id, order_id))


@pytest.fixture()
def customer(make_user):
    return make_user()


@pytest.fixture()
def ctx(customer):
    ctx = SessionContext({})
    ctx.bag["user"] = {"id": customer.id, "role": customer.role, "name": customer.name}
    return ctx


@pytest.fixture()
def products(make_product):
    return make_product("A", "10.00"), make_product("B", "5.00")


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def checkout(db, ctx, lock_service, notifier):
    return CheckoutService(db, ctx, lock_service, notification_service=notifier)


def _fill_cart(db, ctx, lock_service, products):
    a, b = products
    carts = CartService(db, ctx, lock_service)
    carts.add_product(a.id)
    carts.add_product(a.id)
    carts.add_product(b.id)


class TestSuccessfulCheckout:
    def test_order_matches_cart_and_cart_is_emptied(self, db, ctx, lock_service, products, checkout, customer):
        _fill_cart(db, ctx, lock_service, products)
        a, b = products

        order = checkout.checkout()

        assert order["total"] == Decimal("25.00")
        assert order["status"] == "pending"
        assert order["user_id"] == customer.id
        assert [(l["product_id"], l["quantity"]) for l in order["lines"]] == [(a.id, 2), (b.id, 1)]
        assert _stored_cart(db, ctx).is_empty()

    def test_lines_record_price_at_purchase(self, db, ctx, lock_service, products, checkout):
        _fill_cart(db, ctx, lock_service, products)

        order = checkout.checkout()

        assert [l["unit_price"] for l in order["lines"]] == [Decimal("10.00"), Decimal("5.00")]

    def test_uses_cart_price_snapshot_not_current_price(self, db, ctx, lock_service, products, checkout):
        _fill_cart(db, ctx, lock_service, products)
        a, _ = products
        a.price = Decimal("100.00")
        db.commit()

        order = checkout.checkout()

        assert order["total"] == Decimal("25.00")

    def test_rows_are_persisted(self, db, ctx, lock_service, products, checkout):
        _fill_cart(db, ctx, lock_service, products)

        order = checkout.checkout()

        assert _count(db, OrderModel) == 1
        assert _count(db, OrderLineModel) == 2
        stored = OrderRepo(db).get_order(order["id"])
        assert stored.total == Decimal("25.00")

    def test_notification_sent_after_commit(self, db, ctx, lock_service, products, checkout, notifier, customer):
        _fill_cart(db, ctx, lock_service, products)

        order = checkout.checkout()

        assert notifier.sent == [(customer.id, order["id"])]

    def test_lock_released_after_checkout(self, db, ctx, lock_service, products, checkout, fake_redis):
        _fill_cart(db, ctx, lock_service, products)

        checkout.checkout()

        assert fake_redis.store == {}


class TestRejectedCheckout:
    def test_empty_cart(self, db, checkout):
        with pytest.raises(EmptyCart):
            checkout.checkout()

        assert _count(db, OrderModel) == 0

    def test_unauthenticated_session_keeps_cart(self, db, lock_service, products, notifier):
        anonymous = SessionContext({})
        CartService(db, anonymous, lock_service).add_product(products[0].id)
        before = _stored_cart(db, anonymous).snapshot()

        with pytest.raises(Unauthorized):
            CheckoutService(db, anonymous, lock_service, notification_service=notifier).checkout()

        assert _stored_cart(db, anonymous).snapshot() == before
        assert _count(db, OrderModel) == 0


class TestUnavailableProducts:
    def test_deleted_product_is_dropped_and_reported(self, db, ctx, lock_service, products, checkout, notifier):
        _fill_cart(db, ctx, lock_service, products)
        a, b = products
        #product disappears from the catalog while it sits in the cart
        db.delete(b)
        db.commit()

        with pytest.raises(NotFound, match="B"):
            checkout.checkout()

        assert _count(db, OrderModel) == 0
        assert _count(db, OrderLineModel) == 0
        assert [(line.product_id, line.quantity) for line in _stored_cart(db, ctx).snapshot()] == [(a.id, 2)]
        assert notifier.sent == []

    def test_next_checkout_succeeds_with_remaining_lines(self, db, ctx, lock_service, products, checkout):
        _fill_cart(db, ctx, lock_service, products)
        a, b = products
        db.delete(b)
        db.commit()

        with pytest.raises(NotFound):
            checkout.checkout()
        order = checkout.checkout()

        assert order["total"] == Decimal("20.00")
        assert [(l["product_id"], l["quantity"]) for l in order["lines"]] == [(a.id, 2)]
        assert _stored_cart(db, ctx).is_empty()


class TestReplayedSession:
    def test_second_checkout_with_same_cookie_sees_cleared_cart(self, db, ctx, lock_service, products, notifier):
        _fill_cart(db, ctx, lock_service, products)
        #a stale copy of the cookie taken before the first checkout
        replayed = SessionContext(dict(ctx.bag))

        CheckoutService(db, ctx, lock_service, notification_service=notifier).checkout()

        with pytest.raises(EmptyCart):
            CheckoutService(db, replayed, lock_service, notification_service=notifier).checkout()

        assert _count(db, OrderModel) == 1
        assert len(notifier.sent) == 1

    def test_cart_row_is_cleared_in_the_order_transaction(
        self, db, ctx, lock_service, products, checkout, monkeypatch
    ):
        _fill_cart(db, ctx, lock_service, products)
        original_commit = OrderRepo.commit
        seen = []

        def commit(self):
            #what another connection could read right before the commit lands
            other = SessionLocal()
            try:
                seen.append(len(CartRepo(other).load(ctx.session_id)))
            finally:
                other.close()
            original_commit(self)

        monkeypatch.setattr(OrderRepo, "commit", commit)
        checkout.checkout()

        assert seen == [2]
        assert _stored_cart(db, ctx).is_empty()


class TestFailedCheckoutIsAtomic:
    def test_line_write_failure_leaves_nothing_behind(
        self, db, ctx, lock_service, products, checkout, notifier, monkeypatch
    ):
        _fill_cart(db, ctx, lock_service, products)
        before = _stored_cart(db, ctx).snapshot()

        def broken(self, order_id, lines):
            raise OperationalError("INSERT INTO order_lines", {}, Exception("database is locked"))

        monkeypatch.setattr(OrderRepo, "create_order_lines", broken)

        with pytest.raises(CheckoutFailed):
            checkout.checkout()

        assert _count(db, OrderModel) == 0
        assert _count(db, OrderLineModel) == 0
        assert _stored_cart(db, ctx).snapshot() == before
        assert notifier.sent == []

    def test_retry_after_failure_succeeds(self, db, ctx, lock_service, products, checkout, monkeypatch):
        _fill_cart(db, ctx, lock_service, products)
        original = OrderRepo.create_order_lines

        def broken(self, order_id, lines):
            raise OperationalError("INSERT INTO order_lines", {}, Exception("timeout"))

        monkeypatch.setattr(OrderRepo, "create_order_lines", broken)
        with pytest.raises(CheckoutFailed):
            checkout.checkout()

        monkeypatch.setattr(OrderRepo, "create_order_lines", original)
        order = checkout.checkout()

        assert order["total"] == Decimal("25.00")
        assert _count(db, OrderModel) == 1

    def test_cancellation_rolls_back_and_propagates(self, db, ctx, lock_service, products, checkout, monkeypatch):
        _fill_cart(db, ctx, lock_service, products)

        def cancelled(self, order_id, lines):
            raise asyncio.CancelledError()

        monkeypatch.setattr(OrderRepo, "create_order_lines", cancelled)

        with pytest.raises(asyncio.CancelledError):
            checkout.checkout()

        assert _count(db, OrderModel) == 0
        assert len(_stored_cart(db, ctx)) == 2
