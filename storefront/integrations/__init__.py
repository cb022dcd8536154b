"""
Integrations layer.
This package contains all code used to communicate with the external license backend:
- License catalogue search and demo seeding
- Order submission

Key rule:
- The storefront controller MUST NOT call the backend directly.
- It calls integration clients (under storefront/integrations/clients).
- We use the MOCK client during development and the REAL_HTTP client against a running backend.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (storefront/api/main.py).
"""

from .contracts.interfaces import LicenseCatalogClient
from .contracts.licenses import (
    DEFAULT_TIER,
    CartItem,
    License,
    OrderItem,
    OrderRequest,
    OrderResult,
    SeedResult,
)
from .response_wrappers import IntegrationResponseError

__all__ = [
    "LicenseCatalogClient",
    "DEFAULT_TIER", "CartItem", "License", "OrderItem", "OrderRequest", "OrderResult", "SeedResult",
    "IntegrationResponseError",
]
