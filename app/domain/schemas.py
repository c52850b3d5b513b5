# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime

from app.domain.errors import InvalidInput


class ApiModel(BaseModel):
    """Wspolna konfiguracja: JSON w camelCase, snake_case tez przechodzi na wejsciu."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# WARTOSCI DOMENOWE
# =====================================================
class CustomerInfo(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class Address(ApiModel):
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)


# =====================================================
# PRODUKTY
# =====================================================
class ProductIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    inventory: int = Field(0, ge=0)
    section: Literal["retail", "wholesale"]
    is_new: bool = False
    is_bestseller: bool = False
    is_active: bool = True


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    inventory: Optional[int] = Field(None, ge=0)
    section: Optional[Literal["retail", "wholesale"]] = None
    is_new: Optional[bool] = None
    is_bestseller: Optional[bool] = None
    is_active: Optional[bool] = None


class ProductOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    inventory: int
    section: str
    is_new: bool
    is_bestseller: bool
    is_active: bool
    created_at: datetime


# =====================================================
# KOSZYK
# =====================================================
class CartLineIn(ApiModel):
    """Dodanie produktu do koszyka. Walidacja ilosci jest w CartService."""

    product_id: int
    quantity: int = 1


class CartLineUpdate(ApiModel):
    quantity: int


class CartLineOut(ApiModel):
    id: int
    session_id: str
    product_id: int
    quantity: int
    created_at: datetime
    product: Optional[ProductOut] = None


class CartTotalOut(ApiModel):
    total: Decimal


class CartLineRemovedOut(ApiModel):
    removed: bool


class CartClearedOut(ApiModel):
    removed: int


# =====================================================
# ZAMOWIENIA
# =====================================================
class OrderCreate(ApiModel):
    """
    Plaski payload z checkoutu (tak jak wysyla go frontend).
    Billing jest opcjonalny - brak wszystkich pol billing* oznacza "jak shipping".
    """

    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: str = Field(..., min_length=3, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)

    shipping_address: str = Field(..., min_length=1, max_length=500)
    shipping_city: str = Field(..., min_length=1, max_length=100)
    shipping_state: str = Field(..., min_length=1, max_length=100)
    shipping_country: str = Field(..., min_length=1, max_length=100)
    shipping_zip_code: str = Field(..., min_length=1, max_length=20)

    billing_address: Optional[str] = Field(None, max_length=500)
    billing_city: Optional[str] = Field(None, max_length=100)
    billing_state: Optional[str] = Field(None, max_length=100)
    billing_country: Optional[str] = Field(None, max_length=100)
    billing_zip_code: Optional[str] = Field(None, max_length=20)

    notes: Optional[str] = None

    def customer(self) -> CustomerInfo:
        return CustomerInfo(name=self.customer_name, email=self.customer_email, phone=self.customer_phone)

    def shipping(self) -> Address:
        return Address(
            address=self.shipping_address,
            city=self.shipping_city,
            state=self.shipping_state,
            country=self.shipping_country,
            zip_code=self.shipping_zip_code,
        )

    def billing(self) -> Optional[Address]:
        fields = [
            self.billing_address,
            self.billing_city,
            self.billing_state,
            self.billing_country,
            self.billing_zip_code,
        ]
        if not any(fields):
            return None
        if not all(fields):
            raise InvalidInput("Billing address must be complete or omitted")
        return Address(
            address=self.billing_address,
            city=self.billing_city,
            state=self.billing_state,
            country=self.billing_country,
            zip_code=self.billing_zip_code,
        )


class OrderItemOut(ApiModel):
    id: int
    product_id: int
    quantity: int
    price: Decimal
    product: Optional[ProductOut] = None


class OrderOut(ApiModel):
    id: int
    user_id: int
    session_id: str
    total_amount: Decimal
    status: str

    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None

    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_country: str
    shipping_zip_code: str

    billing_address: str
    billing_city: str
    billing_state: str
    billing_country: str
    billing_zip_code: str

    notes: Optional[str] = None
    created_at: datetime
    items: List[OrderItemOut] = []


class OrderStatusPatch(ApiModel):
    status: str


class HealthOut(BaseModel):
    status: str
