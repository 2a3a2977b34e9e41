# Services

from .storefront_client import StorefrontClient
from .checkout_service import CheckoutService

__all__ = ["StorefrontClient", "CheckoutService"]
