"""
Local License Backend (MOCK client).

Purpose:
- Acts as a development-time license backend when the real API is not running
- Does NOT make any network calls; catalogue and orders live in memory

Usage:
- Wired in storefront/api/main.py when INTEGRATIONS_MODE=mock
- Used by tests and scripts/run_storefront_demo.py

Swap:
Replace with clients/real_http/license_api.py by unsetting INTEGRATIONS_MODE
(or setting it to "real") and pointing STOREFRONT_BACKEND_URL at the backend.
"""

import logging
import uuid
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from storefront.errors import ServerError
from storefront.integrations.contracts.interfaces import LicenseCatalogClient
from storefront.integrations.contracts.licenses import License, OrderRequest, OrderResult, SeedResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

DEMO_VENDOR = "Saad"

_DEMO_LICENSES: List[License] = [
    License(
        sku="SAAD-STD-12",
        name="Saad Endpoint Protection",
        price=Decimal("49.00"),
        duration_months=12,
        tier="Standard",
        features=["Real-time malware scanning", "Web filtering", "Email support"],
    ),
    License(
        sku="SAAD-PRO-12",
        name="Saad Endpoint Protection Pro",
        price=Decimal("89.00"),
        duration_months=12,
        tier="Pro",
        features=["Everything in Standard", "Ransomware rollback", "Device control", "Priority support", "Audit reports"],
    ),
    License(
        sku="SAAD-BKP-24",
        name="Saad Cloud Backup",
        price=Decimal("120.00"),
        duration_months=24,
        tier=None,
        features=["1 TB encrypted storage", "Daily snapshots"],
    ),
    License(
        sku="SAAD-MDM-12",
        name="Saad Mobile Device Management",
        price=Decimal("35.50"),
        duration_months=12,
        tier="Business",
        features=[],
    ),
]


# ---------------------------------------------------------------------------
# Mock client
# ---------------------------------------------------------------------------

class MockLicenseApiClient(LicenseCatalogClient):
    """
    In-memory license backend.

    Parameters
    ----------
    licenses : iterable of License, optional
        Initial catalogue. Empty by default so the "seed" path is exercised.
    out_of_stock : iterable of str, optional
        SKUs whose orders are rejected with detail "out of stock".
    vendor : str
        Vendor the catalogue belongs to; searches for other vendors return nothing.
    """

    def __init__(
        self,
        licenses: Optional[Iterable[License]] = None,
        out_of_stock: Optional[Iterable[str]] = None,
        vendor: str = DEMO_VENDOR,
    ):
        self._catalog: Dict[str, License] = {lic.sku: lic for lic in (licenses or [])}
        self._out_of_stock = set(out_of_stock or [])
        self._vendor = vendor
        self.orders: Dict[str, OrderRequest] = {}
        self.calls: List[str] = []

        logger.info("[LICENSE MOCK] Client initialised (catalogue=%d)", len(self._catalog))

    async def search_licenses(self, query: Optional[str], vendor: str) -> List[License]:
        self.calls.append("search")
        if vendor.lower() != self._vendor.lower():
            return []
        needle = (query or "").strip().lower()
        if not needle:
            return list(self._catalog.values())
        return [lic for lic in self._catalog.values() if _matches(lic, needle)]

    async def seed_catalog(self) -> SeedResult:
        self.calls.append("seed")
        inserted = 0
        for lic in _DEMO_LICENSES:
            if lic.sku not in self._catalog:
                self._catalog[lic.sku] = lic
                inserted += 1
        logger.info("[LICENSE MOCK] Seeded %d licenses", inserted)
        return SeedResult(inserted=inserted)

    async def place_order(self, request: OrderRequest) -> OrderResult:
        self.calls.append("order")
        if not request.items:
            raise ServerError("Order must contain at least one item", status_code=422, detail="Order must contain at least one item")

        for item in request.items:
            if item.sku in self._out_of_stock:
                raise ServerError("out of stock", status_code=409, detail="out of stock")
            if item.sku not in self._catalog:
                detail = f"Unknown license {item.sku}"
                raise ServerError(detail, status_code=404, detail=detail)

        order_id = f"ORD-{uuid.uuid4().hex[:8].upper()}"
        total = sum((item.unit_price * item.quantity for item in request.items), Decimal("0"))
        self.orders[order_id] = request
        logger.info("[LICENSE MOCK] Order %s created total=%s", order_id, total)
        return OrderResult(order_id=order_id, total=total, raw={"order_id": order_id, "status": "pending"})


def _matches(lic: License, needle: str) -> bool:
    haystack = [lic.sku, lic.name, lic.tier or ""] + list(lic.features)
    return any(needle in value.lower() for value in haystack)
