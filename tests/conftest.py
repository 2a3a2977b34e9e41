import json
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient

from teeshop.core.session import SessionManager
from teeshop.engine.catalog import ProductCatalog
from teeshop.main import app
from teeshop.models.product import Product
from teeshop.routes.dependencies import get_session_manager, get_storefront_client
from teeshop.services.storefront_client import StorefrontClient

PRODUCTS = [
    {
        "id": "prod-tee",
        "name": "Classic Tee",
        "basePrice": "25.99",
        "imageUrl": "/img/classic-tee.png",
        "description": "Heavyweight cotton tee",
    },
    {
        "id": "prod-hoodie",
        "name": "Pullover Hoodie",
        "basePrice": "49.50",
        "imageUrl": "/img/hoodie.png",
        "description": "Fleece hoodie",
    },
]


class FakeStorefront:
    """In-memory stand-in for the storefront API"""

    def __init__(self):
        self.products = list(PRODUCTS)
        self.orders: dict[str, dict] = {}
        self.reviews: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_products = False
        self.order_error: tuple[int, dict] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/products" and request.method == "GET":
            if self.fail_products:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=self.products)

        if path == "/api/orders" and request.method == "POST":
            if self.order_error:
                status, body = self.order_error
                return httpx.Response(status, json=body)
            body = json.loads(request.content)
            order_id = str(uuid.uuid4())
            order = {
                "id": order_id,
                **body["order"],
                "createdAt": "2025-06-15T12:00:00",
                "orderItems": [
                    {"id": str(uuid.uuid4()), "orderId": order_id, **item}
                    for item in body["items"]
                ],
            }
            self.orders[order_id] = order
            return httpx.Response(201, json=order)

        if path.startswith("/api/orders/") and request.method == "GET":
            order = self.orders.get(path.rsplit("/", 1)[-1])
            if not order:
                return httpx.Response(404, json={"error": "Order not found"})
            return httpx.Response(200, json=order)

        if path.endswith("/reviews"):
            product_id = path.split("/")[3]
            if request.method == "GET":
                return httpx.Response(200, json=self.reviews.get(product_id, []))
            body = json.loads(request.content)
            review = {"id": str(uuid.uuid4()), "productId": product_id, **body}
            self.reviews.setdefault(product_id, []).append(review)
            return httpx.Response(201, json=review)

        return httpx.Response(404, json={"error": "Not found"})

    @property
    def created_orders(self) -> list[dict]:
        return list(self.orders.values())


@pytest.fixture
def fake_api() -> FakeStorefront:
    return FakeStorefront()


@pytest.fixture
def storefront(fake_api) -> StorefrontClient:
    return StorefrontClient(
        base_url="http://storefront.test",
        transport=httpx.MockTransport(fake_api.handler),
    )


@pytest.fixture
def catalog() -> ProductCatalog:
    return ProductCatalog(Product.model_validate(p) for p in PRODUCTS)


@pytest.fixture
def sessions() -> SessionManager:
    return SessionManager()


@pytest.fixture
def api(storefront, sessions):
    app.dependency_overrides[get_storefront_client] = lambda: storefront
    app.dependency_overrides[get_session_manager] = lambda: sessions
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def checkout_form() -> dict:
    """A complete, valid credit card checkout submission"""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@gmail.com",
        "phone": "5551234567",
        "address": "12 Print Street",
        "city": "Portland",
        "state": "OR",
        "zipCode": "97201",
        "country": "United States",
        "paymentMethod": "credit",
        "cardName": "Jane Doe",
        "cardNumber": "4532 0151 1283 0366",
        "expiryDate": "12/99",
        "cvv": "123",
        "sameAsShipping": True,
    }
