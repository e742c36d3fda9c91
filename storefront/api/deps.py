# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import UserRead
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.product_client import ProductClient


#podmieniane w testach przez app.dependency_overrides
def get_product_client() -> ProductClient:
    return ProductClient()


@lru_cache
def get_lock_service() -> LockService:
    #jeden pool polaczen redis na proces
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_current_user(
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
) -> UserRead:
    """
    Kontekst wywolujacego (id, adres, telefon).
    Uwierzytelnianie jest poza tym serwisem, ufamy przekazanemu user_id.
    """
    user = UserRepo(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return UserRead.model_validate(user)
