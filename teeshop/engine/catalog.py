"""Product lookup for pricing and display"""

import logging
from typing import Iterable, Optional

from ..errors import NetworkError
from ..models.product import Product

logger = logging.getLogger(__name__)


class ProductCatalog:
    """Read-only index of fetched products by id"""

    def __init__(self, products: Iterable[Product] = ()):
        self.products: dict[str, Product] = {p.id: p for p in products}

    def get(self, product_id: Optional[str]) -> Optional[Product]:
        """Get a product by ID; None for unknown or missing ids"""
        if not product_id:
            return None
        return self.products.get(product_id)

    def __len__(self) -> int:
        return len(self.products)


async def load_catalog(client) -> ProductCatalog:
    """
    Fetch the product list.

    A failed fetch yields an empty catalog so that every line prices at the
    fallback unit price instead of blocking the cart.
    """
    try:
        products = await client.list_products()
    except NetworkError as e:
        logger.warning(f"Product fetch failed, pricing with fallbacks: {e}")
        return ProductCatalog()
    return ProductCatalog(products)
