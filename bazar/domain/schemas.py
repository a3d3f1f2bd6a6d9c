# bazar/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class LineItemIn(BaseModel):
    """Snapshot of a product attached to a cart."""

    product_id: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Unit price at add-time")
    tax: Decimal = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2, description="Unit tax at add-time")
    quantity: int = Field(..., gt=0)


class DiscountIn(BaseModel):
    discount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class AddressIn(BaseModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    company: str | None = None
    country: str | None = Field(None, min_length=2, max_length=2, description="ISO 3166-1 alpha-2")
    state: str | None = None
    city: str | None = None
    postcode: str | None = Field(None, max_length=20)
    address: str | None = None
    address_secondary: str | None = None
    phone: str | None = Field(None, max_length=50)
    email: str | None = None


class ShippingIn(BaseModel):
    driver: str = Field("local-pickup", min_length=1, max_length=50)
    cost: Decimal = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    tax: Decimal = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)


class CartItemOut(BaseModel):
    product_id: int
    price: Decimal
    tax: Decimal
    quantity: int


class AddressOut(AddressIn):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ShippingOut(ShippingIn):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Cart with its computed totals."""

    cart_id: int
    user_id: int | None = None
    currency: str
    discount: Decimal
    items: List[CartItemOut]
    address: AddressOut | None = None
    shipping: ShippingOut | None = None
    total: Decimal
    net_total: Decimal
    tax: Decimal
    updated_at: datetime | None = None


class ChunkSweepReport(BaseModel):
    """Outcome of one pass over the chunk storage."""

    namespace: str
    scanned: int = 0
    deleted: int = 0
    failed: int = 0
