"""Cart pricing: unit prices and the order cost breakdown"""

from typing import Iterable, Optional

from ..models.cart import CartLineItem, Coupon
from ..models.checkout import PricingBreakdown
from .catalog import ProductCatalog

TAX_RATE = 0.08
FREE_SHIPPING_THRESHOLD = 50.00
FLAT_SHIPPING_FEE = 5.99

# Used when a line's product cannot be resolved
FALLBACK_UNIT_PRICE = 25.99
FALLBACK_PRODUCT_NAME = "Custom Design"
FALLBACK_IMAGE_URL = (
    "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab"
    "?ixlib=rb-4.0.3&auto=format&fit=crop&w=120&h=120"
)


def unit_price(item: CartLineItem, catalog: ProductCatalog) -> float:
    """Custom price override, else the product's base price, else the fallback"""
    if item.custom_price is not None:
        return item.custom_price
    product = catalog.get(item.product_id)
    if product is not None:
        return product.base_price
    return FALLBACK_UNIT_PRICE


def line_total(item: CartLineItem, catalog: ProductCatalog) -> float:
    return unit_price(item, catalog) * item.quantity


def cart_subtotal(items: Iterable[CartLineItem], catalog: ProductCatalog) -> float:
    return sum((line_total(item, catalog) for item in items), 0.0)


def compute_pricing(subtotal: float, coupon: Optional[Coupon] = None) -> PricingBreakdown:
    """
    Derive the cost breakdown from a cart subtotal.

    Tax applies to the discounted amount; the free shipping threshold is
    tested against the subtotal before discount.
    """
    if subtotal < 0:
        raise ValueError(f"Subtotal cannot be negative: {subtotal}")

    discount = subtotal * coupon.discount_rate if coupon else 0.0
    tax = (subtotal - discount) * TAX_RATE
    shipping = 0.0 if subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    total = subtotal - discount + tax + shipping

    return PricingBreakdown(
        subtotal=subtotal,
        discount=discount,
        tax=tax,
        shipping=shipping,
        total=total,
    )


def price_cart(
    items: Iterable[CartLineItem],
    catalog: ProductCatalog,
    coupon: Optional[Coupon] = None,
) -> PricingBreakdown:
    return compute_pricing(cart_subtotal(items, catalog), coupon)
