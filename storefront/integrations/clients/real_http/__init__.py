"""
Real HTTP integration clients.

These clients communicate with the external license/order backend.

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to storefront/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in storefront/api/main.py only.
"""

from .license_api import LicenseApiClient

__all__ = ["LicenseApiClient"]
