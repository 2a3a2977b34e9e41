"""Cart models"""

from typing import Optional
from pydantic import BaseModel, Field

from .base import ApiModel
from .checkout import PricingBreakdown


class CartLineItem(ApiModel):
    """One cart entry: a product configuration and its quantity"""
    id: str = ""
    product_id: Optional[str] = None
    design_id: Optional[str] = None
    size: str
    color: str
    quantity: int = Field(default=1, gt=0)
    custom_price: Optional[float] = Field(default=None, ge=0)

    @property
    def configuration(self) -> tuple:
        """Key identifying an equivalent line in the cart"""
        return (self.product_id, self.design_id, self.size, self.color)


class Coupon(BaseModel):
    """Coupon applied to the checkout session"""
    code: str
    discount_rate: float = Field(gt=0, lt=1)


class AddToCartRequest(ApiModel):
    """Request to add an item to the cart"""
    product_id: Optional[str] = None
    design_id: Optional[str] = None
    size: str
    color: str
    quantity: int = Field(default=1, gt=0)
    custom_price: Optional[float] = Field(default=None, ge=0)


class UpdateCartItemRequest(BaseModel):
    """Request to change a line quantity; zero or less removes the line"""
    quantity: int


class ApplyCouponRequest(BaseModel):
    code: str


class CartLineView(ApiModel):
    """Cart line resolved against the catalog for display"""
    item: CartLineItem
    name: str
    image_url: Optional[str] = None
    unit_price: float
    line_total: float


class CartResponse(ApiModel):
    """Cart API response"""
    session_id: str
    items: list[CartLineView] = []
    cart_count: int = 0
    coupon: Optional[Coupon] = None
    pricing: PricingBreakdown
    display: dict[str, str] = {}
    message: Optional[str] = None
