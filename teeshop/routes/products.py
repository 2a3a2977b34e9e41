"""Product review routes, passed through to the storefront API"""

from fastapi import APIRouter, Depends

from ..models.review import Review, ReviewCreate
from ..services.storefront_client import StorefrontClient
from .dependencies import get_storefront_client

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("/{product_id}/reviews", response_model=list[Review])
async def list_reviews(
    product_id: str,
    client: StorefrontClient = Depends(get_storefront_client),
):
    """Get reviews for a product"""
    return await client.list_reviews(product_id)


@router.post("/{product_id}/reviews", response_model=Review)
async def create_review(
    product_id: str,
    review: ReviewCreate,
    client: StorefrontClient = Depends(get_storefront_client),
):
    """Submit a review; rating must be 1-5"""
    return await client.create_review(product_id, review)
