"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- The license backend is not running locally
- We want to test the storefront end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients return data shaped according to storefront/integrations/contracts/*

Switching to real:
The client is selected in storefront/api/main.py from INTEGRATIONS_MODE.
"""

from .local_license_api import MockLicenseApiClient

__all__ = ["MockLicenseApiClient"]
