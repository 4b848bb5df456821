# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

#tasks are registered by importing their modules
celery_app.conf.imports = (
    "storefront.tasks.expire",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-carts-every-hour": {
        "task": "storefront.tasks.expire.expire_carts_task",
        "schedule": 3600.0,
    },
}

celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.timezone = "UTC"
