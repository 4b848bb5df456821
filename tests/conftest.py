import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_tmp, 'test.db')}")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_tmp, "uploads"))
os.environ.setdefault("SECRET_KEY", "test-secret")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import storefront.data.models  # noqa: E402,F401
from storefront.api import create_app  # noqa: E402
from storefront.api.deps import get_lock_service, get_storage  # noqa: E402
from storefront.data.database import Base, SessionLocal, engine  # noqa: E402
from storefront.data.models.product import ProductModel  # noqa: E402
from storefront.data.models.user import UserModel  # noqa: E402
from storefront.services.lock_service import LockService  # noqa: E402
from storefront.services.passwords import hash_password  # noqa: E402
from storefront.services.storage import DiskStorage  # noqa: E402

from tests.helpers import PASSWORD, FakeRedis  # noqa: E402


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def lock_service(fake_redis):
    return LockService(client=fake_redis, ttl=30)


@pytest.fixture()
def storage(tmp_path):
    return DiskStorage(root=str(tmp_path / "uploads"))


@pytest.fixture()
def app(lock_service, storage):
    app = create_app()
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_storage] = lambda: storage
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def make_user(db):
    def _make(email="alice@shop.io", role="customer", name="Alice", password=PASSWORD):
        user = UserModel(name=name, email=email, role=role, password_hash=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_product(db):
    def _make(name="Keyboard", price="10.00", owner=None, stock=5):
        product = ProductModel(
            name=name,
            price=Decimal(price),
            stock=stock,
            owner_id=owner.id if owner else None,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make
