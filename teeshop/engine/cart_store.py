"""Cart line item storage for one checkout session"""

import uuid
from typing import Optional

from ..errors import LineItemNotFoundError
from ..models.cart import CartLineItem
from .catalog import ProductCatalog
from .pricing import cart_subtotal


class CartStore:
    """
    Ordered cart line items for a single session.

    Adding a configuration already in the cart (same product, design, size
    and color) increments that line rather than creating a duplicate.
    Totals are projections over the current items and are never cached.
    """

    def __init__(self):
        self._items: list[CartLineItem] = []

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._items)

    @property
    def cart_count(self) -> int:
        """Total quantity across all lines"""
        return sum(item.quantity for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, item_id: str) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def add(self, item: CartLineItem) -> CartLineItem:
        """Add an item to the cart, merging with an equivalent line"""
        existing_item = next(
            (i for i in self._items if i.configuration == item.configuration),
            None,
        )

        if existing_item:
            existing_item.quantity += item.quantity
            if item.custom_price is not None:
                existing_item.custom_price = item.custom_price
            return existing_item

        line = item.model_copy(update={"id": item.id or str(uuid.uuid4())})
        self._items.append(line)
        return line

    def update_quantity(self, item_id: str, quantity: int) -> Optional[CartLineItem]:
        """
        Set a line's quantity.

        A quantity of zero or less removes the line and returns None.
        """
        item = self.get(item_id)
        if not item:
            raise LineItemNotFoundError(item_id)

        if quantity <= 0:
            self.remove(item_id)
            return None

        item.quantity = quantity
        return item

    def remove(self, item_id: str) -> bool:
        """Remove a line; absent ids are ignored"""
        before = len(self._items)
        self._items = [i for i in self._items if i.id != item_id]
        return len(self._items) < before

    def clear(self) -> None:
        self._items = []

    def cart_total(self, catalog: ProductCatalog) -> float:
        return cart_subtotal(self._items, catalog)
