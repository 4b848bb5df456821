# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.services.user_service import UserService
from storefront.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def seed(admin_email: str | None = None, admin_password: str | None = None):
    """Create the bootstrap admin account when configured and missing."""
    email = admin_email or ADMIN_EMAIL
    password = admin_password or ADMIN_PASSWORD
    if not email or not password:
        return

    db = SessionLocal()
    try:
        admin = UserService(db).ensure_admin(email, password)
        logger.info(f"Admin account {admin.email} ready")
    finally:
        db.close()
