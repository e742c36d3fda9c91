# storefront/services/order_service.py
import uuid
from decimal import Decimal
from typing import Dict, Any, List

from kombu.exceptions import OperationalError as KombuOperationalError
from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.database import is_constraint_violation
from storefront.data.models.order import OrderModel
from storefront.domain.errors import ConflictError, EmptyCartError, NotFoundError
from storefront.domain.schemas import UserRead
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import ORDER_LOCK_TTL_SECONDS, CLEAR_CART_ON_ORDER
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamienia caly koszyk usera w jedno niezmienne zamowienie (snapshot pozycji).
    User moze miec co najwyzej jedno zamowienie.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
        clear_cart_on_order: bool | None = None,
        lock_ttl: int = ORDER_LOCK_TTL_SECONDS,
    ):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()
        self.clear_cart_on_order = CLEAR_CART_ON_ORDER if clear_cart_on_order is None else clear_cart_on_order
        self.lock_ttl = lock_ttl

    @staticmethod
    def _order_to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "cart_items": order.cart_items,
            "total_price": order.total_price,
            "address": order.address,
            "phone": order.phone,
            "created_at": order.created_at,
        }

    def create_order(self, user: UserRead) -> Dict[str, Any]:
        """
        Use Case: tworzenie zamowienia z koszyka.

        1. Lock per user (dwa szybkie klikniecia "zamow" -> jedno zamowienie)
        2. Odrzuca, jesli user ma juz zamowienie
        3. Odrzuca pusty koszyk
        4. Snapshot pozycji + total, adres i telefon z profilu
        5. Wysyla powiadomienie (async)
        """
        token = uuid.uuid4().hex

        if self.lock_service and not self.lock_service.acquire_order_lock(user.id, token, self.lock_ttl):
            raise ConflictError("An order for this user is already being placed")

        try:
            order = self._materialize(user)
        finally:
            self._release_lock(user.id, token)

        logger.info(f"Order {order.id} created for user {user.id}, total {order.total_price}")

        #zamowienie juz zapisane, blad brokera tylko logujemy
        try:
            self.notification_service.send_order_notification(user.id, order.id, order.total_price)
        except (KombuOperationalError, RedisError, ConnectionError) as e:
            logger.error(f"Order {order.id} notification not dispatched: {e}")

        return self._order_to_dict(order)

    def _release_lock(self, user_id: int, token: str) -> None:
        if not self.lock_service:
            return
        try:
            self.lock_service.release_order_lock(user_id, token)
        except RedisError as e:
            #lock i tak wygasnie po lock_ttl
            logger.warning(f"Order lock of user {user_id} not released: {e}")

    def _materialize(self, user: UserRead) -> OrderModel:
        if self.repo.get_order_by_user(user.id):
            raise ConflictError(
                "You have an existing order. Please complete or cancel it before placing a new order."
            )

        lines = self.cart_repo.list_lines(user.id)
        if not lines:
            raise EmptyCartError("Cart is empty")

        #line.price ma juz w sobie ilosc, wiec zwykla suma
        total = sum((line.price for line in lines), Decimal("0.00"))

        snapshot = [
            {
                "product_id": line.product_id,
                "quantity": line.quantity,
                "price": str(line.price),
            }
            for line in lines
        ]

        order = OrderModel(
            user_id=user.id,
            cart_items=snapshot,
            total_price=total,
            address=user.address,
            phone=user.phone,
        )

        try:
            self.repo.add_order(order)
            if self.clear_cart_on_order:
                removed = self.cart_repo.delete_lines_for_user(user.id)
                logger.info(f"Cleared {removed} cart lines of user {user.id}")
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            #ktos byl szybszy: unique na orders.user_id
            if not is_constraint_violation(e, "uq_orders_user", "orders.user_id"):
                raise
            raise ConflictError(
                "You have an existing order. Please complete or cancel it before placing a new order."
            )

        return self.repo.refresh(order)

    #query
    def list_orders(self, user: UserRead) -> List[Dict[str, Any]]:
        return [self._order_to_dict(o) for o in self.repo.list_orders_by_user(user.id)]

    def get_order(self, user: UserRead, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        #cudze zamowienie wyglada jak nieistniejace
        if not order or order.user_id != user.id:
            raise NotFoundError(f"Order {order_id} not found")

        return self._order_to_dict(order)
