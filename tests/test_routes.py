import pytest


@pytest.fixture
def session_id(api) -> str:
    response = api.post("/api/session", json={"user_id": "user-42"})
    assert response.status_code == 200
    return response.json()["session_id"]


def add_tee(api, session_id, **overrides):
    body = {"productId": "prod-tee", "size": "M", "color": "black", "quantity": 2, **overrides}
    return api.post(f"/api/cart/{session_id}/items", json=body)


def test_health(api):
    assert api.get("/health").json()["status"] == "healthy"


def test_unknown_session(api):
    response = api.get("/api/cart/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Session not found"}

    response = api.delete("/api/session/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Session not found"}


def test_cart_lines_and_pricing(api, session_id):
    response = add_tee(api, session_id)
    assert response.status_code == 200

    cart = response.json()
    assert cart["cartCount"] == 2
    line = cart["items"][0]
    assert line["name"] == "Classic Tee"
    assert line["unitPrice"] == 25.99
    assert line["lineTotal"] == pytest.approx(51.98)
    assert cart["pricing"]["shipping"] == 0.0
    assert cart["display"]["subtotal"] == "51.98"


def test_unknown_product_uses_fallback_display(api, session_id):
    cart = add_tee(api, session_id, productId="retired", quantity=1).json()
    line = cart["items"][0]
    assert line["name"] == "Custom Design"
    assert line["unitPrice"] == 25.99
    assert cart["pricing"]["shipping"] == 5.99


def test_malformed_products_degrade_to_fallbacks(api, session_id, fake_api):
    fake_api.products = [{"id": "prod-tee", "name": "Classic Tee", "basePrice": None}]
    response = add_tee(api, session_id, quantity=1)
    assert response.status_code == 200
    assert response.json()["items"][0]["name"] == "Custom Design"


def test_update_and_remove_lines(api, session_id):
    line_id = add_tee(api, session_id).json()["items"][0]["item"]["id"]

    cart = api.put(f"/api/cart/{session_id}/items/{line_id}", json={"quantity": 5}).json()
    assert cart["cartCount"] == 5

    cart = api.put(f"/api/cart/{session_id}/items/{line_id}", json={"quantity": 0}).json()
    assert cart["items"] == []
    assert cart["message"] == "Item removed"

    response = api.put(f"/api/cart/{session_id}/items/{line_id}", json={"quantity": 1})
    assert response.status_code == 404

    assert api.delete(f"/api/cart/{session_id}/items/{line_id}").status_code == 200


def test_coupon_apply_and_remove(api, session_id):
    add_tee(api, session_id)

    cart = api.post(f"/api/cart/{session_id}/coupon", json={"code": "save10"}).json()
    assert cart["coupon"] == {"code": "SAVE10", "discount_rate": 0.10}
    assert cart["pricing"]["discount"] == pytest.approx(5.198)

    cart = api.delete(f"/api/cart/{session_id}/coupon").json()
    assert cart["coupon"] is None
    assert cart["pricing"]["discount"] == 0


def test_invalid_coupon_leaves_totals(api, session_id):
    add_tee(api, session_id)
    api.post(f"/api/cart/{session_id}/coupon", json={"code": "FIRST20"})

    response = api.post(f"/api/cart/{session_id}/coupon", json={"code": "bogus"})
    assert response.status_code == 400
    assert "coupon" in response.json()["error"]

    cart = api.get(f"/api/cart/{session_id}").json()
    assert cart["coupon"]["code"] == "FIRST20"


def test_checkout_flow(api, session_id, checkout_form, fake_api):
    add_tee(api, session_id)
    api.post(f"/api/cart/{session_id}/coupon", json={"code": "SAVE10"})

    response = api.post(f"/api/checkout/{session_id}", json=checkout_form)
    assert response.status_code == 200
    order = response.json()
    assert order["status"] == "pending"
    assert order["orderItems"][0]["price"] == "25.99"

    assert len(fake_api.created_orders) == 1
    assert api.get(f"/api/cart/{session_id}").json()["items"] == []

    confirmation = api.get(f"/api/checkout/orders/{order['id']}")
    assert confirmation.status_code == 200
    assert confirmation.json()["shippingAddress"]["city"] == "Portland"


def test_checkout_reports_all_invalid_fields(api, session_id, checkout_form):
    add_tee(api, session_id)
    checkout_form.update(cardNumber="123", cvv="1", sameAsShipping=False)

    response = api.post(f"/api/checkout/{session_id}", json=checkout_form)
    assert response.status_code == 422
    fields = [e["field"] for e in response.json()["errors"]]
    assert fields[:2] == ["cardNumber", "cvv"]
    assert "billingCity" in fields


def test_checkout_empty_cart(api, session_id, checkout_form):
    response = api.post(f"/api/checkout/{session_id}", json=checkout_form)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Please add items")


def test_checkout_upstream_error(api, session_id, checkout_form, fake_api):
    add_tee(api, session_id)
    fake_api.order_error = (500, {"error": "Failed to create order"})

    response = api.post(f"/api/checkout/{session_id}", json=checkout_form)
    assert response.status_code == 502
    assert response.json() == {"error": "Failed to create order"}
    assert api.get(f"/api/cart/{session_id}").json()["cartCount"] == 2


def test_missing_order(api):
    response = api.get("/api/checkout/orders/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_logout_clears_session(api, session_id, sessions):
    add_tee(api, session_id)
    assert api.delete(f"/api/session/{session_id}").status_code == 200
    assert sessions.get_session(session_id) is None
    assert api.get(f"/api/cart/{session_id}").status_code == 404


def test_reviews(api):
    response = api.post(
        "/api/products/prod-tee/reviews", json={"rating": 4, "reviewText": "Soft"}
    )
    assert response.status_code == 200
    assert api.get("/api/products/prod-tee/reviews").json()[0]["rating"] == 4

    assert api.post("/api/products/prod-tee/reviews", json={"rating": 6}).status_code == 422
