"""Product review models"""

from typing import Optional
from datetime import datetime
from pydantic import Field

from .base import ApiModel


class Review(ApiModel):
    """Review of a product"""
    id: str
    product_id: str
    user_id: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    review_text: Optional[str] = None
    created_at: Optional[datetime] = None


class ReviewCreate(ApiModel):
    """Body of POST /api/products/:id/reviews"""
    rating: int = Field(ge=1, le=5)
    review_text: Optional[str] = None
