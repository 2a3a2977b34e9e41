"""Order assembly from a validated checkout"""

from typing import Iterable

from ..errors import EmptyCartError
from ..models.cart import CartLineItem
from ..models.checkout import CheckoutInput, PricingBreakdown
from ..models.order import (
    OrderHeader,
    OrderItem,
    OrderRequest,
    OrderStatus,
    ShippingAddress,
)
from .catalog import ProductCatalog
from .pricing import unit_price


def shipping_address_from(checkout: CheckoutInput) -> ShippingAddress:
    """Shipping address from the shipping section; billing never contributes"""
    return ShippingAddress(
        first_name=checkout.first_name,
        last_name=checkout.last_name,
        email=checkout.email,
        phone=checkout.phone,
        address=checkout.address,
        city=checkout.city,
        state=checkout.state,
        zip_code=checkout.zip_code,
        country=checkout.country,
    )


def assemble_order(
    checkout: CheckoutInput,
    items: Iterable[CartLineItem],
    pricing: PricingBreakdown,
    user_id: str,
    catalog: ProductCatalog,
) -> OrderRequest:
    """
    Build the order creation request for the storefront API.

    Args:
        checkout: Validated checkout input
        items: Cart line items at submission time
        pricing: Breakdown computed for the same items
        user_id: Authenticated user placing the order
        catalog: Products used to resolve line prices

    Raises:
        EmptyCartError: if there are no items
    """
    items = list(items)
    if not items:
        raise EmptyCartError()

    order_items = [
        OrderItem(
            product_id=item.product_id,
            design_id=item.design_id,
            quantity=item.quantity,
            size=item.size,
            color=item.color,
            price=unit_price(item, catalog),
        )
        for item in items
    ]

    header = OrderHeader(
        user_id=user_id,
        total=pricing.total,
        status=OrderStatus.PENDING,
        shipping_address=shipping_address_from(checkout),
    )

    return OrderRequest(order=header, items=order_items)
