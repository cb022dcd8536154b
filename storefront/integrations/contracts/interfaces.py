from abc import ABC, abstractmethod
from typing import List, Optional

from .licenses import License, OrderRequest, OrderResult, SeedResult


# ---------------------------------------------------------------------------
# Abstract backend interface
# ---------------------------------------------------------------------------

class LicenseCatalogClient(ABC):
    """Every license backend client (mock or real HTTP) must implement this interface.

    Failures are raised as storefront.errors.NetworkFailure (transport problems)
    or storefront.errors.ServerError (non-success status).
    """

    @abstractmethod
    async def search_licenses(self, query: Optional[str], vendor: str) -> List[License]:
        """Return the licenses matching the free-text query, scoped to one vendor."""

    @abstractmethod
    async def seed_catalog(self) -> SeedResult:
        """Ask the backend to populate its catalogue with demonstration data."""

    @abstractmethod
    async def place_order(self, request: OrderRequest) -> OrderResult:
        """Submit an order and return the backend's order id and total."""
