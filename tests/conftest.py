"""Pytest fixtures for storefront tests."""

from decimal import Decimal

import pytest

from storefront.controller import StorefrontController
from storefront.integrations.clients.mocks.local_license_api import MockLicenseApiClient
from storefront.integrations.contracts.licenses import License
from storefront.state import StorefrontState


@pytest.fixture
def lic1():
    return License(sku="LIC-1", name="Saad Antivirus", price=Decimal("10.00"), duration_months=12)


@pytest.fixture
def lic2():
    return License(
        sku="LIC-2",
        name="Saad Backup",
        price=Decimal("5.00"),
        duration_months=6,
        tier="Pro",
        features=["a", "b", "c", "d", "e"],
    )


@pytest.fixture
def state():
    return StorefrontState()


@pytest.fixture
def mock_client(lic1, lic2):
    """In-memory backend that already carries LIC-1 and LIC-2."""
    return MockLicenseApiClient(licenses=[lic1, lic2])


@pytest.fixture
def controller(state, mock_client):
    return StorefrontController(state, mock_client)
