"""
Shopping cart for the license storefront.

The cart maps sku -> CartItem. Adding an sku that is already present bumps its
quantity instead of creating a second entry. The total is always derived from
the current items and never stored.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Dict, List, Optional

from storefront.integrations.contracts.licenses import CartItem, License, OrderItem

MIN_QUANTITY = 1

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


def parse_quantity(raw: Any) -> int:
    """Quantity typed into a cart row. Blank or non-numeric input counts as 1; never below 1."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return max(MIN_QUANTITY, raw)
    value = "" if raw is None else str(raw).strip()
    match = _LEADING_INT_RE.match(value)
    if match is None:
        return MIN_QUANTITY
    return max(MIN_QUANTITY, int(match.group(0)))


class Cart:
    def __init__(self) -> None:
        self._items: Dict[str, CartItem] = {}

    def add(self, sku: str, license: License) -> CartItem:
        """Add one unit of a license. Repeated adds increment the quantity."""
        item = self._items.get(sku)
        if item is None:
            item = CartItem(license=license, quantity=1)
            self._items[sku] = item
        else:
            item.quantity += 1
        return item

    def update_quantity(self, sku: str, quantity: Any) -> Optional[CartItem]:
        """Set the quantity of an existing row, parsed with parse_quantity.

        Unknown skus are ignored and return None.
        """
        item = self._items.get(sku)
        if item is None:
            return None
        item.quantity = parse_quantity(quantity)
        return item

    def remove(self, sku: str) -> None:
        self._items.pop(sku, None)

    def clear(self) -> None:
        self._items.clear()

    def get(self, sku: str) -> Optional[CartItem]:
        return self._items.get(sku)

    def items(self) -> List[CartItem]:
        return list(self._items.values())

    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._items.values()), Decimal("0"))

    def order_items(self) -> List[OrderItem]:
        return [
            OrderItem(
                sku=item.sku,
                name=item.license.name,
                quantity=item.quantity,
                unit_price=item.license.price,
                subtotal=item.subtotal,
            )
            for item in self._items.values()
        ]

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, sku: object) -> bool:
        return sku in self._items
