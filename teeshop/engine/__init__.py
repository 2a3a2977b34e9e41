# Checkout engine: cart, pricing, coupons, validation and order assembly

from .catalog import ProductCatalog, load_catalog
from .pricing import (
    TAX_RATE,
    FREE_SHIPPING_THRESHOLD,
    FLAT_SHIPPING_FEE,
    FALLBACK_UNIT_PRICE,
    unit_price,
    compute_pricing,
    price_cart,
)
from .coupons import CouponResolver, DEFAULT_COUPONS, default_resolver
from .cart_store import CartStore
from .validator import validate_checkout, luhn_checksum_valid, card_expiry_boundary
from .assembler import assemble_order

__all__ = [
    "ProductCatalog",
    "load_catalog",
    "TAX_RATE",
    "FREE_SHIPPING_THRESHOLD",
    "FLAT_SHIPPING_FEE",
    "FALLBACK_UNIT_PRICE",
    "unit_price",
    "compute_pricing",
    "price_cart",
    "CouponResolver",
    "DEFAULT_COUPONS",
    "default_resolver",
    "CartStore",
    "validate_checkout",
    "luhn_checksum_valid",
    "card_expiry_boundary",
    "assemble_order",
]
