# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class CartLineIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = Field(..., ge=1, description="Ilosc produktu (co najmniej 1)")


class CartLineUpdate(BaseModel):
    quantity: int = Field(..., ge=1, description="Nowa ilosc produktu (co najmniej 1)")


class ProductOut(BaseModel):
    id: int
    title: str
    price: Decimal
    category_id: Optional[int] = None


class CartLineOut(BaseModel):
    """Schema dla pozycji koszyka (response)."""

    id: int
    user_id: int
    product_id: int
    quantity: int
    price: Decimal
    product: Optional[ProductOut] = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Schema dla calego koszyka usera (response)."""

    user_id: int
    items: List[CartLineOut]
    total: Decimal


class UserCreate(BaseModel):
    """Schema dla tworzenia uzytkownika."""

    id: int = Field(..., gt=0, description="ID uzytkownika (musi byc > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Imie uzytkownika")
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response), tez kontekst wywolujacego w use case'ach."""

    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    price: Decimal


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    cart_items: List[OrderItemOut]
    total_price: Decimal
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
