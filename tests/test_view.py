from decimal import Decimal

from storefront.controller import order_confirmation
from storefront.integrations.contracts.licenses import OrderResult
from storefront.state import StorefrontState
from storefront.view import build_view, format_money


def test_format_money():
    assert format_money(Decimal("25")) == "$25.00"
    assert format_money(Decimal("1234.5")) == "$1234.50"


def test_page_total_matches_order_confirmation():
    total = Decimal("1234.5")
    message = order_confirmation(OrderResult(order_id="ORD-1", total=total))
    assert message.endswith(f"Total: {format_money(total)}")


def test_view_derives_cards_cart_and_controls(lic1, lic2):
    state = StorefrontState(catalog=[lic1, lic2], message="hi")
    view = build_view(state)
    assert view["controls"]["submit_disabled"] is True
    assert view["cart"]["empty"] is True
    assert view["licenses"][0]["tier"] == "Standard"
    assert view["licenses"][1]["features"] == ["a", "b", "c", "d"]
    assert view["licenses"][1]["price_display"] == "$5.00"

    state.cart.add("LIC-1", lic1)
    state.cart.add("LIC-1", lic1)
    state.cart.add("LIC-2", lic2)
    view = build_view(state)
    assert view["cart"]["total"] == 25.0
    assert view["cart"]["total_display"] == "$25.00"
    assert view["cart"]["count"] == 3
    assert view["cart"]["items"][0]["subtotal_display"] == "$20.00"
    assert view["controls"]["submit_disabled"] is False


def test_busy_disables_every_trigger(lic1):
    state = StorefrontState(busy=True)
    state.cart.add("LIC-1", lic1)
    controls = build_view(state)["controls"]
    assert controls == {"search_disabled": True, "seed_disabled": True, "submit_disabled": True}
