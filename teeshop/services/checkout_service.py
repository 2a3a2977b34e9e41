"""Checkout orchestration: validate, price, assemble and submit an order"""

import logging
from datetime import date
from typing import Any, Optional, Union

from ..core.session import CheckoutSession
from ..engine.assembler import assemble_order
from ..engine.catalog import ProductCatalog, load_catalog
from ..engine.pricing import price_cart
from ..engine.validator import validate_checkout
from ..errors import CheckoutInProgressError, EmptyCartError
from ..models.checkout import CheckoutInput, PricingBreakdown
from ..models.order import Order
from .storefront_client import StorefrontClient

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Turns a checkout submission into an order on the storefront API.

    Only one submission may be in flight per session; a second submit while
    the first is pending is rejected rather than creating a duplicate order.
    """

    def __init__(self, client: StorefrontClient):
        self.client = client

    async def catalog(self) -> ProductCatalog:
        return await load_catalog(self.client)

    async def quote(self, session: CheckoutSession) -> PricingBreakdown:
        """Current pricing for the session's cart and coupon"""
        catalog = await self.catalog()
        return price_cart(session.cart.items, catalog, session.coupon)

    async def submit(
        self,
        session: CheckoutSession,
        data: Union[CheckoutInput, dict[str, Any]],
        today: Optional[date] = None,
    ) -> Order:
        """
        Place an order for the session's cart.

        Raises:
            CheckoutInProgressError: another submission is pending
            EmptyCartError: the cart has no items
            CheckoutValidationError: the submission has invalid fields
            NetworkError: the order API failed; the cart is left intact
        """
        if session.submitting:
            raise CheckoutInProgressError()

        session.submitting = True
        try:
            if session.cart.is_empty:
                raise EmptyCartError()

            checkout = validate_checkout(data, today=today)

            items = session.cart.items
            catalog = await self.catalog()
            pricing = price_cart(items, catalog, session.coupon)
            request = assemble_order(checkout, items, pricing, session.user_id, catalog)

            order = await self.client.create_order(request)
        finally:
            session.submitting = False

        logger.info(
            f"Order {order.id} placed by user {session.user_id}: "
            f"${pricing.total:.2f} ({len(items)} lines, "
            f"coupon={session.coupon.code if session.coupon else 'none'})"
        )
        session.reset()
        return order
