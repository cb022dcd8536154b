"""
Storefront controller.

Orchestrates the three backend operations (catalog search, catalog seed,
order submission) and the cart commands against one StorefrontState.

Each backend operation runs Idle -> Pending -> (Success | Failed) -> Idle.
The state's busy flag marks Pending; a trigger that arrives while busy is
ignored, never queued. Every failure ends as a status message on the state.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from storefront.error_handler import ErrorHandler
from storefront.errors import ORDER_FAILED, SEARCH_FAILED, SEED_FAILED, ValidationGap
from storefront.integrations.contracts.interfaces import LicenseCatalogClient
from storefront.integrations.contracts.licenses import CartItem, License, OrderRequest, OrderResult
from storefront.state import StorefrontState
from storefront.validation import ContactDetails

logger = logging.getLogger(__name__)

DEFAULT_VENDOR = "Saad"
NO_RESULTS_MESSAGE = "No results. Try seeding the catalog."


def build_order_request(state: StorefrontState, contact: ContactDetails) -> OrderRequest:
    if state.cart.is_empty:
        raise ValidationGap("Your cart is empty.")
    return OrderRequest(
        company=contact.company,
        contact_name=contact.contact_name,
        contact_email=contact.contact_email,
        contact_phone=contact.contact_phone,
        items=state.cart.order_items(),
        notes=contact.notes,
    )


def order_confirmation(result: OrderResult) -> str:
    return f"Order placed! ID: {result.order_id} • Total: ${result.total:.2f}"


class StorefrontController:
    def __init__(
        self,
        state: StorefrontState,
        client: LicenseCatalogClient,
        vendor: str = DEFAULT_VENDOR,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.state = state
        self.client = client
        self.vendor = vendor
        self.errors = error_handler or ErrorHandler()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def search(self, query: Optional[str] = None) -> bool:
        """Replace the catalog with the licenses matching ``query``.

        Passing None re-runs the current query. Returns False when ignored
        because another operation is pending.
        """
        if self.state.busy:
            logger.info("Search ignored: an operation is already pending")
            return False
        if query is not None:
            self.state.query = query
        self.state.busy = True
        self.state.message = ""
        try:
            await self._run_search()
        finally:
            self.state.busy = False
        return True

    async def seed(self) -> bool:
        """Populate the backend catalogue with demo data, then refresh the catalog."""
        if self.state.busy:
            logger.info("Seed ignored: an operation is already pending")
            return False
        self.state.busy = True
        self.state.message = ""
        try:
            try:
                result = await self.client.seed_catalog()
            except Exception as exc:
                self._fail(exc, {"operation": "seed"}, SEED_FAILED, always_fallback=True)
                return True
            self.state.message = result.summary
            logger.info("Catalogue seeded: %s", result.summary)
            await self._run_search()
        finally:
            self.state.busy = False
        return True

    async def ensure_loaded(self) -> None:
        """Run the first search of a session."""
        if not self.state.loaded and not self.state.busy:
            self.state.loaded = True
            await self.search()

    async def _run_search(self) -> None:
        self.state.search_ticket += 1
        ticket = self.state.search_ticket
        query = self.state.query.strip() or None

        try:
            licenses = await self.client.search_licenses(query, self.vendor)
        except Exception as exc:
            if self._is_stale(ticket):
                logger.info("Dropping failure of superseded search #%d: %s", ticket, exc)
                return
            self._fail(exc, {"operation": "search", "query": query}, SEARCH_FAILED)
            return

        if self._is_stale(ticket):
            logger.info("Dropping response of superseded search #%d", ticket)
            return

        self.state.catalog = licenses
        self.state.loaded = True
        logger.info("Search #%d returned %d licenses", ticket, len(licenses))
        if not licenses:
            self.state.message = NO_RESULTS_MESSAGE

    def _is_stale(self, ticket: int) -> bool:
        return ticket != self.state.search_ticket

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------

    def add_to_cart(self, sku: str, license: Optional[License] = None) -> Optional[CartItem]:
        """Add one unit of ``sku``; the snapshot comes from the catalog unless given."""
        license = license or self.state.find_license(sku)
        if license is None:
            logger.warning("Add to cart ignored: sku %s is not in the catalog", sku)
            return None
        return self.state.cart.add(sku, license)

    def update_quantity(self, sku: str, quantity: Any) -> Optional[CartItem]:
        return self.state.cart.update_quantity(sku, quantity)

    def remove_from_cart(self, sku: str) -> None:
        self.state.cart.remove(sku)

    def total(self) -> Decimal:
        return self.state.cart.total()

    @property
    def can_submit(self) -> bool:
        return not self.state.busy and not self.state.cart.is_empty

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def place_order(self, contact: ContactDetails) -> Optional[OrderResult]:
        """Submit the cart. The cart is cleared only when the backend accepts the order."""
        if not self.can_submit:
            logger.info(
                "Order submission ignored: busy=%s cart_items=%d",
                self.state.busy,
                len(self.state.cart),
            )
            return None

        request = build_order_request(self.state, contact)
        self.state.busy = True
        self.state.message = ""
        try:
            result = await self.client.place_order(request)
        except Exception as exc:
            self._fail(exc, {"operation": "place_order", "items": len(request.items)}, ORDER_FAILED)
            return None
        finally:
            self.state.busy = False

        self.state.cart.clear()
        self.state.message = order_confirmation(result)
        return result

    def _fail(self, exc: Exception, context: dict, fallback: str, always_fallback: bool = False) -> None:
        outcome = self.errors.handle_exception(exc, context=context, fallback=fallback, always_fallback=always_fallback)
        self.state.message = outcome["message"]
