# Checkout Models

from .product import Product
from .checkout import PaymentMethod, PricingBreakdown, CheckoutInput
from .cart import (
    CartLineItem,
    Coupon,
    AddToCartRequest,
    UpdateCartItemRequest,
    ApplyCouponRequest,
    CartLineView,
    CartResponse,
)
from .order import (
    Order,
    OrderItem,
    OrderHeader,
    OrderRequest,
    OrderStatus,
    ShippingAddress,
)
from .review import Review, ReviewCreate

__all__ = [
    "Product",
    "PaymentMethod",
    "PricingBreakdown",
    "CheckoutInput",
    "CartLineItem",
    "Coupon",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ApplyCouponRequest",
    "CartLineView",
    "CartResponse",
    "Order",
    "OrderItem",
    "OrderHeader",
    "OrderRequest",
    "OrderStatus",
    "ShippingAddress",
    "Review",
    "ReviewCreate",
]
