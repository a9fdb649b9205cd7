"""
Cart - the line items a shopper has selected.

Adding a product already in the cart bumps its quantity instead of
creating a second line, so ids stay unique.
"""
from typing import Iterator, Mapping

from .models import CartItem, Product


class Cart:
    """Ordered collection of cart items, unique by product id."""

    def __init__(self, items: list[CartItem] = None):
        self._items: list[CartItem] = []
        for item in items or []:
            self._merge(item)

    @classmethod
    def from_quantities(cls, catalog, quantities: Mapping[str, int]) -> 'Cart':
        """
        Build a cart from {product_id: quantity}.

        Raises:
            KeyError: a product id is not in the catalog
            ValueError: a quantity is below 1
        """
        cart = cls()
        for product_id, qty in quantities.items():
            qty = int(qty)
            if qty < 1:
                raise ValueError(f"Quantity for '{product_id}' must be at least 1, got {qty}")
            product = catalog.get(product_id)
            if product is None:
                raise KeyError(product_id)
            cart._merge(CartItem.from_product(product, qty))
        return cart

    def _merge(self, item: CartItem):
        for existing in self._items:
            if existing.id == item.id:
                existing.quantity += item.quantity
                return
        self._items.append(item)

    def add_item(self, product: Product) -> CartItem:
        """Add one unit of a product."""
        for existing in self._items:
            if existing.id == product.id:
                existing.quantity += 1
                return existing
        item = CartItem.from_product(product)
        self._items.append(item)
        return item

    def remove_item(self, product_id: str):
        """Remove a product's line entirely. Unknown ids are ignored."""
        self._items = [item for item in self._items if item.id != product_id]

    def clear(self):
        self._items = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def item_count(self) -> int:
        """Total units across all lines."""
        return sum(item.quantity for item in self._items)

    @property
    def line_count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(list(self._items))

    def __contains__(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._items)
