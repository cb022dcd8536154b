"""
Build the storefront view model: catalog cards, cart panel and status line.

Everything here is derived from StorefrontState on every render; nothing is
cached between renders.
"""
from decimal import Decimal
from typing import Any, Dict, List

from storefront.integrations.contracts.licenses import CartItem, License
from storefront.state import StorefrontState

MAX_CARD_FEATURES = 4


def format_money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def license_card(lic: License) -> Dict[str, Any]:
    return {
        "sku": lic.sku,
        "name": lic.name,
        "price": float(lic.price),
        "price_display": format_money(lic.price),
        "duration_months": lic.duration_months,
        "tier": lic.display_tier,
        "features": lic.features[:MAX_CARD_FEATURES],
    }


def cart_row(item: CartItem) -> Dict[str, Any]:
    return {
        "sku": item.sku,
        "name": item.license.name,
        "quantity": item.quantity,
        "unit_price_display": format_money(item.license.price),
        "subtotal_display": format_money(item.subtotal),
    }


def build_view(state: StorefrontState) -> Dict[str, Any]:
    cart_items: List[CartItem] = state.cart.items()
    total = state.cart.total()
    return {
        "query": state.query,
        "message": state.message,
        "busy": state.busy,
        "licenses": [license_card(lic) for lic in state.catalog],
        "cart": {
            "items": [cart_row(item) for item in cart_items],
            "count": state.cart.count,
            "empty": not cart_items,
            "total": float(total),
            "total_display": format_money(total),
        },
        "controls": {
            "search_disabled": state.busy,
            "seed_disabled": state.busy,
            "submit_disabled": state.busy or not cart_items,
        },
    }
