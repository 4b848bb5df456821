# storefront/services/session_context.py
import uuid
from typing import Any, MutableMapping

from storefront.domain.errors import Unauthenticated
from storefront.domain.schemas import SessionUser

SESSION_ID_KEY = "sid"
SESSION_USER_KEY = "user"


class SessionContext:
    """
    Explicit view over one visitor's session bag.

    Services receive this object instead of reaching into request state. The
    bag only carries the session id and the logged-in user; the cart itself is
    stored server-side under the session id (see CartRepo).
    """

    def __init__(self, bag: MutableMapping[str, Any]):
        self.bag = bag

    @property
    def session_id(self) -> str:
        sid = self.bag.get(SESSION_ID_KEY)
        if not sid:
            sid = uuid.uuid4().hex
            self.bag[SESSION_ID_KEY] = sid
        return sid

    @property
    def existing_session_id(self) -> str | None:
        return self.bag.get(SESSION_ID_KEY)

    @property
    def current_user(self) -> SessionUser | None:
        data = self.bag.get(SESSION_USER_KEY)
        return SessionUser(**data) if data else None

    def require_user(self) -> SessionUser:
        user = self.current_user
        if user is None:
            raise Unauthenticated("Login required")
        return user

    def login(self, user: SessionUser) -> None:
        self.bag[SESSION_USER_KEY] = user.model_dump()

    def logout(self) -> None:
        self.bag.clear()
