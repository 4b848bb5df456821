# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications.
    Dispatched through Celery so checkout never waits on delivery.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        send_order_notification_task.delay(user_id, order_id)

    @staticmethod
    def send_status_notification(user_id: int, order_id: int, status: str):
        send_status_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """Order placed. A mail/SMS gateway would be called here; for now it is logged."""
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} received")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="storefront.services.notification_service.send_status_notification_task")
def send_status_notification_task(user_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is now {status}")
    return {"user_id": user_id, "order_id": order_id, "order_status": status, "status": "sent"}
