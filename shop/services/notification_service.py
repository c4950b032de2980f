# shop/services/notification_service.py
from shop.celery_worker import celery_app
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zlozonym zamowieniu.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str, total_price: str):
        send_order_notification_task.delay(user_id, order_id, total_price)


@celery_app.task(name="shop.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str, total_price: str):
    """
    Celery task - w prawdziwym systemie wyslalby email do klienta.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total_price}")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
