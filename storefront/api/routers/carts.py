#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_product_client
from storefront.api.errors import http_error
from storefront.data.database import get_db
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import (
    CartLineIn,
    CartLineUpdate,
    CartLineOut,
    CartOut,
    UserRead,
)
from storefront.services.cart_service import CartService
from storefront.services.product_client import ProductClient

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    product_client: ProductClient = Depends(get_product_client),
) -> CartService:
    return CartService(db=db, product_client=product_client)


@router.get("/", response_model=CartOut)
def view_cart(
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    return svc.list_lines(user.id)


@router.post("/", response_model=CartLineOut, status_code=201)
def add_to_cart(
    payload: CartLineIn,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.add_line(
            user_id=user.id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except ServiceError as e:
        raise http_error(e)


@router.put("/{line_id}", response_model=CartLineOut)
def update_cart_line(
    line_id: int,
    payload: CartLineUpdate,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.update_line(user.id, line_id, payload.quantity)
    except ServiceError as e:
        raise http_error(e)


@router.delete("/{line_id}", status_code=204)
def remove_from_cart(
    line_id: int,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        svc.remove_line(user.id, line_id)
    except ServiceError as e:
        raise http_error(e)
    return Response(status_code=204)
