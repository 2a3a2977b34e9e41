"""Checkout API routes"""

from typing import Any
from fastapi import APIRouter, Body, Depends

from ..core.session import CheckoutSession
from ..models.order import Order
from ..services.checkout_service import CheckoutService
from ..services.storefront_client import StorefrontClient
from .dependencies import (
    get_checkout_service,
    get_checkout_session,
    get_storefront_client,
)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    client: StorefrontClient = Depends(get_storefront_client),
):
    """Get a placed order with its items, for the confirmation view"""
    return await client.get_order(order_id)


@router.post("/{session_id}", response_model=Order)
async def checkout(
    payload: dict[str, Any] = Body(...),
    session: CheckoutSession = Depends(get_checkout_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Place an order for the session's cart.

    The payload is the checkout form: shipping fields, payment method with
    card details for credit payments, and billing fields when billing
    differs from shipping. Every invalid field is reported in one response.
    """
    return await service.submit(session, payload)
