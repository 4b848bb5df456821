import pytest

from storefront.data.seed import seed
from storefront.domain.errors import ValidationFailed
from storefront.domain.schemas import SellerCreate
from storefront.repos.user_repo import UserRepo
from storefront.services.passwords import verify_password
from storefront.services.session_context import SessionContext
from storefront.services.role_gate import RoleGate
from storefront.services.user_service import UserService


class TestAdminSeed:
    def test_seed_creates_admin_once(self, db):
        seed(admin_email="Boss@Shop.io", admin_password="topsecret")
        seed(admin_email="boss@shop.io", admin_password="other")

        admins = UserRepo(db).list_by_roles(["admin"])
        assert [a.email for a in admins] == ["boss@shop.io"]
        assert verify_password("topsecret", admins[0].password_hash)

    def test_seed_without_credentials_does_nothing(self, db, monkeypatch):
        monkeypatch.setattr("storefront.data.seed.ADMIN_EMAIL", None)
        monkeypatch.setattr("storefront.data.seed.ADMIN_PASSWORD", None)

        seed()

        assert UserRepo(db).list_by_roles(["admin"]) == []


class TestSellerAccounts:
    def test_create_seller(self, db):
        seller = UserService(db).create_seller(
            SellerCreate(name="Sam", email="sam@shop.io", password="secret123")
        )

        assert seller.role == "seller"

    def test_duplicate_email(self, db, make_user):
        make_user(email="sam@shop.io")

        with pytest.raises(ValidationFailed):
            UserService(db).create_seller(
                SellerCreate(name="Sam", email="sam@shop.io", password="secret123")
            )


class TestRoleGate:
    @pytest.mark.parametrize(
        "role,required,allowed",
        [
            ("seller", "seller", True),
            ("customer", "seller", False),
            ("admin", "seller", True),
            ("admin", "admin", True),
            ("seller", "admin", False),
        ],
    )
    def test_authorize(self, role, required, allowed):
        ctx = SessionContext({"user": {"id": 1, "role": role, "name": "x"}})

        assert RoleGate.authorize(ctx, required) is allowed

    def test_anonymous_is_never_authorized(self):
        assert RoleGate.authorize(SessionContext({}), "customer") is False
