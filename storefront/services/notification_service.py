# storefront/services/notification_service.py
from decimal import Decimal

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, total_price: Decimal):
        """
        Wysyla powiadomienie o przyjeciu zamowienia.
        """
        #Decimal nie przejdzie przez serializer json celery
        send_order_notification_task.delay(user_id, order_id, str(total_price))


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, total_price: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, total {total_price}")

    return {"user_id": user_id, "order_id": order_id, "total_price": total_price, "status": "sent"}
