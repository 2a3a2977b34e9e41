"""Cart API routes"""

from typing import Optional
from fastapi import APIRouter, Depends

from ..core.session import CheckoutSession
from ..engine.catalog import ProductCatalog
from ..engine.pricing import (
    FALLBACK_IMAGE_URL,
    FALLBACK_PRODUCT_NAME,
    line_total,
    price_cart,
    unit_price,
)
from ..models.cart import (
    AddToCartRequest,
    ApplyCouponRequest,
    CartLineItem,
    CartLineView,
    CartResponse,
    UpdateCartItemRequest,
)
from ..services.checkout_service import CheckoutService
from .dependencies import get_checkout_service, get_checkout_session

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def build_cart_response(
    session: CheckoutSession,
    catalog: ProductCatalog,
    message: Optional[str] = None,
) -> CartResponse:
    """Project the session cart into display lines and a pricing breakdown"""
    items = session.cart.items
    lines = []
    for item in items:
        product = catalog.get(item.product_id)
        lines.append(
            CartLineView(
                item=item,
                name=product.name if product else FALLBACK_PRODUCT_NAME,
                image_url=(product.image_url if product else None) or FALLBACK_IMAGE_URL,
                unit_price=unit_price(item, catalog),
                line_total=line_total(item, catalog),
            )
        )

    pricing = price_cart(items, catalog, session.coupon)
    return CartResponse(
        session_id=session.session_id,
        items=lines,
        cart_count=session.cart.cart_count,
        coupon=session.coupon,
        pricing=pricing,
        display=pricing.display(),
        message=message,
    )


@router.get("/{session_id}", response_model=CartResponse)
async def get_cart(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Get the session cart with current pricing"""
    return build_cart_response(session, await service.catalog())


@router.post("/{session_id}/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Add an item to the cart"""
    line = session.cart.add(CartLineItem(**request.model_dump()))
    session.touch()
    return build_cart_response(
        session,
        await service.catalog(),
        message=f"Added {request.quantity}x item to cart (line {line.id})",
    )


@router.put("/{session_id}/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Update item quantity; zero or less removes the item"""
    updated = session.cart.update_quantity(item_id, request.quantity)
    session.touch()
    return build_cart_response(
        session,
        await service.catalog(),
        message="Cart updated" if updated else "Item removed",
    )


@router.delete("/{session_id}/items/{item_id}", response_model=CartResponse)
async def remove_from_cart(
    item_id: str,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Remove an item from the cart"""
    session.cart.remove(item_id)
    session.touch()
    return build_cart_response(session, await service.catalog(), message="Item removed")


@router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Clear all items from cart"""
    session.cart.clear()
    session.touch()
    return build_cart_response(session, await service.catalog(), message="Cart cleared")


@router.post("/{session_id}/coupon", response_model=CartResponse)
async def apply_coupon(
    request: ApplyCouponRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Apply a coupon, replacing any coupon already applied"""
    coupon = session.apply_coupon(request.code)
    return build_cart_response(
        session,
        await service.catalog(),
        message=f"You saved {coupon.discount_rate:.0%} on your order",
    )


@router.delete("/{session_id}/coupon", response_model=CartResponse)
async def remove_coupon(
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """Remove the applied coupon"""
    session.remove_coupon()
    return build_cart_response(
        session,
        await service.catalog(),
        message="The coupon discount has been removed from your order",
    )
