# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_lock_service, get_notification_service
from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import OrderOut, UserRead
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(
        db,
        lock_service=lock_service,
        notification_service=notification_service,
    )


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    user: UserRead = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Tworzy zamowienie z calego koszyka usera.
    Wysyla powiadomienie asynchronicznie.
    """
    try:
        return svc.create_order(user)
    except ServiceError as e:
        raise http_error(e)


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user: UserRead = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserRead = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.get_order(user, order_id)
    except ServiceError as e:
        raise http_error(e)
