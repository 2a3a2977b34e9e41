"""Product models"""

from typing import Optional
from pydantic import Field

from .base import ApiModel


class Product(ApiModel):
    """Product in the catalog, as served by GET /api/products"""
    id: str
    name: str
    base_price: float = Field(ge=0)
    image_url: Optional[str] = None
    description: Optional[str] = None
