"""Order models for the storefront order API"""

from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import Field, field_serializer

from .base import ApiModel


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class ShippingAddress(ApiModel):
    """Shipping address for an order"""
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str


class OrderItem(ApiModel):
    """Item in an order"""
    product_id: Optional[str] = None
    design_id: Optional[str] = None
    quantity: int = Field(gt=0)
    size: str
    color: str
    price: float

    # The order API stores decimals and expects them as strings
    @field_serializer("price")
    def price_as_decimal_string(self, value: float) -> str:
        return str(value)


class OrderHeader(ApiModel):
    """Order row created by checkout"""
    user_id: str
    total: float
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: ShippingAddress

    @field_serializer("total")
    def total_as_decimal_string(self, value: float) -> str:
        return str(value)


class OrderRequest(ApiModel):
    """Body of POST /api/orders"""
    order: OrderHeader
    items: list[OrderItem]

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Order(ApiModel):
    """Order as returned by the storefront API"""
    id: str
    user_id: Optional[str] = None
    total: float
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: Optional[ShippingAddress] = None
    created_at: Optional[datetime] = None
    order_items: list[OrderItem] = []

    @field_serializer("total")
    def total_as_decimal_string(self, value: float) -> str:
        return str(value)
