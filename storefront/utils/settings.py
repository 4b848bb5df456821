# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "false").lower() in ("1", "true", "yes")

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", 24 * 60 * 60))
SESSION_LOCK_TTL_SECONDS = int(os.getenv("SESSION_LOCK_TTL_SECONDS", 30))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "public", "uploads"))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
