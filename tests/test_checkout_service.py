import asyncio
from datetime import date

import pytest

from teeshop.errors import (
    CheckoutInProgressError,
    CheckoutValidationError,
    EmptyCartError,
    NetworkError,
)
from teeshop.models.cart import CartLineItem
from teeshop.services.checkout_service import CheckoutService

TODAY = date(2025, 6, 15)


@pytest.fixture
def service(storefront) -> CheckoutService:
    return CheckoutService(storefront)


@pytest.fixture
def session(sessions):
    session = sessions.create_session("user-42")
    session.cart.add(
        CartLineItem(product_id="prod-tee", size="M", color="black", quantity=2)
    )
    return session


async def test_submit_places_order_and_clears_cart(service, session, fake_api, checkout_form):
    session.apply_coupon("SAVE10")
    order = await service.submit(session, checkout_form, today=TODAY)

    assert order.user_id == "user-42"
    assert order.total == pytest.approx(51.98 - 5.198 + (51.98 - 5.198) * 0.08)
    assert [i.price for i in order.order_items] == [25.99]
    assert fake_api.created_orders[0]["shippingAddress"]["email"] == "jane.doe@gmail.com"

    assert session.cart.is_empty
    assert session.coupon is None
    assert session.submitting is False


async def test_empty_cart(service, sessions, checkout_form):
    session = sessions.create_session("user-1")
    with pytest.raises(EmptyCartError):
        await service.submit(session, checkout_form, today=TODAY)
    assert session.submitting is False


async def test_invalid_submission_keeps_cart(service, session, fake_api, checkout_form):
    checkout_form["cardNumber"] = "4532015112830367"
    with pytest.raises(CheckoutValidationError) as exc_info:
        await service.submit(session, checkout_form, today=TODAY)

    assert exc_info.value.fields == ["cardNumber"]
    assert session.cart.cart_count == 2
    assert fake_api.created_orders == []


async def test_api_failure_keeps_cart(service, session, fake_api, checkout_form):
    fake_api.order_error = (500, {"error": "Failed to create order"})
    with pytest.raises(NetworkError, match="Failed to create order"):
        await service.submit(session, checkout_form, today=TODAY)

    assert session.cart.cart_count == 2
    assert session.submitting is False


async def test_product_fetch_failure_uses_fallback_prices(service, session, fake_api, checkout_form):
    fake_api.fail_products = True
    session.cart.add(
        CartLineItem(product_id="prod-hoodie", size="L", color="grey", custom_price=40.0)
    )
    order = await service.submit(session, checkout_form, today=TODAY)
    assert [i.price for i in order.order_items] == [25.99, 40.0]


async def test_single_submission_in_flight(service, session, checkout_form):
    started = asyncio.Event()
    release = asyncio.Event()
    create_order = service.client.create_order

    async def slow_create_order(request):
        started.set()
        await release.wait()
        return await create_order(request)

    service.client.create_order = slow_create_order

    first = asyncio.create_task(service.submit(session, checkout_form, today=TODAY))
    await started.wait()
    with pytest.raises(CheckoutInProgressError):
        await service.submit(session, checkout_form, today=TODAY)

    release.set()
    order = await first
    assert order.id


async def test_quote(service, session):
    session.apply_coupon("FIRST20")
    pricing = await service.quote(session)
    assert pricing.subtotal == pytest.approx(51.98)
    assert pricing.discount == pytest.approx(51.98 * 0.20)
