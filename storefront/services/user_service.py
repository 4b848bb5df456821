from typing import Dict, Any
from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.repos.cart_repo import CartRepo
from storefront.repos.user_repo import UserRepo
from storefront.domain.errors import Unauthenticated, ValidationFailed, NotFound
from storefront.domain.schemas import RegisterIn, LoginIn, UserRead, SessionUser, SellerCreate
from storefront.services.passwords import hash_password, verify_password
from storefront.services.session_context import SessionContext
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ROLES = ("admin", "seller", "customer")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.carts = CartRepo(db)

    def _create(self, name: str, email: str, password: str, role: str) -> UserModel:
        if role not in ROLES:
            raise ValidationFailed(f"Unknown role '{role}'")
        if self.repo.get_by_email(email):
            raise ValidationFailed("An account with this email already exists")

        user = UserModel(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id} with role {role}")
        return created

    def register(self, payload: RegisterIn) -> UserRead:
        created = self._create(payload.name, payload.email, payload.password, payload.role)
        return UserRead.model_validate(created)

    def create_seller(self, payload: SellerCreate) -> UserRead:
        created = self._create(payload.name, payload.email, payload.password, "seller")
        return UserRead.model_validate(created)

    def ensure_admin(self, email: str, password: str, name: str = "Administrator") -> UserModel:
        existing = self.repo.get_by_email(email)
        if existing:
            return existing
        return self._create(name, email, password, "admin")

    def login(self, ctx: SessionContext, payload: LoginIn) -> SessionUser:
        user = self.repo.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.password_hash):
            logger.info(f"Failed login for {payload.email}")
            raise Unauthenticated("Invalid email or password")

        session_user = SessionUser(id=user.id, role=user.role, name=user.name)
        ctx.login(session_user)
        logger.info(f"User {user.id} logged in as {user.role}")
        return session_user

    def logout(self, ctx: SessionContext) -> None:
        """Ends the session; its stored cart goes with it."""
        session_id = ctx.existing_session_id
        if session_id:
            self.carts.delete(session_id)
            self.carts.commit()
        ctx.logout()

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return UserRead.model_validate(user)

    def admin_overview(self) -> Dict[str, Any]:
        users = self.repo.list_by_roles(["seller", "customer"])
        return {
            "users": [UserRead.model_validate(u) for u in users],
            "seller_count": sum(1 for u in users if u.role == "seller"),
            "customer_count": sum(1 for u in users if u.role == "customer"),
        }
