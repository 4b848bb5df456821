# storefront/repos/cart_repo.py
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.session_cart import SessionCartModel
from storefront.domain.cart import Cart
from storefront.utils.settings import SESSION_MAX_AGE


class CartRepo:
    """
    Server-side cart rows, one per session id.

    The session cookie only carries the id; whatever a client replays, the cart
    read here is the one the last committed operation left behind. save() only
    flushes so checkout can clear the cart in the same transaction as the order.
    """

    def __init__(self, db: Session, max_age: int | None = None):
        self.db = db
        self.max_age = max_age or SESSION_MAX_AGE

    def _row(self, session_id: str) -> SessionCartModel | None:
        #always re-read, another request may have committed since our last look
        return self.db.execute(
            select(SessionCartModel)
            .where(SessionCartModel.session_id == session_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def load(self, session_id: str | None) -> Cart:
        if not session_id:
            return Cart()
        row = self.db.execute(
            select(SessionCartModel)
            .where(
                SessionCartModel.session_id == session_id,
                SessionCartModel.expires_at > datetime.now(timezone.utc),
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return Cart.from_data(row.items if row else None)

    def save(self, session_id: str, cart: Cart) -> None:
        row = self._row(session_id)
        if row is None:
            row = SessionCartModel(session_id=session_id)
            self.db.add(row)
        row.items = cart.to_data()
        row.expires_at = datetime.now(timezone.utc) + timedelta(seconds=self.max_age)
        self.db.flush()

    def delete(self, session_id: str) -> None:
        self.db.execute(delete(SessionCartModel).where(SessionCartModel.session_id == session_id))

    def delete_expired(self, now: datetime) -> int:
        result = self.db.execute(
            delete(SessionCartModel)
            .where(SessionCartModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
