"""
Storefront API Client

HTTP client for the storefront backend that owns products, orders and
reviews. Failed requests and undecodable responses surface as
NetworkError; nothing is retried.
"""

import logging
from typing import Optional, Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import NetworkError
from ..models.order import Order, OrderRequest
from ..models.product import Product
from ..models.review import Review, ReviewCreate

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(list[Product])
_ORDER = TypeAdapter(Order)
_REVIEW = TypeAdapter(Review)
_REVIEW_LIST = TypeAdapter(list[Review])


class StorefrontClient:
    """Client for the storefront product, order and review APIs"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API
            timeout: Request timeout in seconds
            transport: Optional transport, used to fake the API in tests
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON response"""
        try:
            response = await self._http_client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {method} {path} - {e}")
            raise NetworkError(f"Could not reach storefront API: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise NetworkError(
                self._error_message(response),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Undecodable response: {method} {path} - {response.text[:200]}")
            raise NetworkError("Storefront API returned an invalid response") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """The API reports failures as {"error": "..."}"""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return response.text or f"Request failed with status {response.status_code}"

    @staticmethod
    def _decode(schema: TypeAdapter, data: Any, path: str) -> Any:
        """Validate a response body against the expected model"""
        try:
            return schema.validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected response shape from {path}: {e}")
            raise NetworkError("Storefront API returned an invalid response") from e

    # ==================== Product APIs ====================

    async def list_products(self) -> list[Product]:
        """Get all products"""
        path = "/api/products"
        return self._decode(_PRODUCT_LIST, await self._request("GET", path), path)

    # ==================== Order APIs ====================

    async def create_order(self, request: OrderRequest) -> Order:
        """Create an order with its line items"""
        path = "/api/orders"
        data = await self._request("POST", path, body=request.to_payload())
        return self._decode(_ORDER, data, path)

    async def get_order(self, order_id: str) -> Order:
        """Get order details with embedded order items"""
        path = f"/api/orders/{order_id}"
        return self._decode(_ORDER, await self._request("GET", path), path)

    # ==================== Review APIs ====================

    async def list_reviews(self, product_id: str) -> list[Review]:
        """Get reviews for a product"""
        path = f"/api/products/{product_id}/reviews"
        return self._decode(_REVIEW_LIST, await self._request("GET", path), path)

    async def create_review(self, product_id: str, review: ReviewCreate) -> Review:
        """Submit a review for a product"""
        path = f"/api/products/{product_id}/reviews"
        data = await self._request(
            "POST",
            path,
            body=review.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._decode(_REVIEW, data, path)
