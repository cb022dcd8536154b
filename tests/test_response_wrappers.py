from decimal import Decimal

import pytest

from storefront.integrations.response_wrappers import (
    IntegrationResponseError,
    extract_error_detail,
    normalize_license,
    normalize_order_result,
    normalize_seed_response,
)


def test_license_defaults_and_tier():
    lic = normalize_license({"sku": "S1", "name": "N", "price": "12.30", "tier": "", "features": None})
    assert lic.price == Decimal("12.30")
    assert lic.tier is None
    assert lic.display_tier == "Standard"
    assert lic.features == []


def test_license_rejects_negative_price():
    with pytest.raises(IntegrationResponseError):
        normalize_license({"sku": "S1", "name": "N", "price": -1})


def test_license_requires_sku():
    with pytest.raises(IntegrationResponseError):
        normalize_license({"name": "N", "price": 1})


def test_seed_response_variants():
    assert normalize_seed_response({"message": "done"}).summary == "done"
    assert normalize_seed_response({"inserted": "2"}).summary == "Seeded 2 items"
    assert normalize_seed_response({}).summary == "Seeded 0 items"
    assert normalize_seed_response([]).summary == "Seeded 0 items"


def test_order_result_accepts_id_alias():
    result = normalize_order_result({"id": 42, "total": "99.5"})
    assert result.order_id == "42"
    assert result.total == Decimal("99.5")


def test_order_result_requires_id():
    with pytest.raises(IntegrationResponseError):
        normalize_order_result({"total": 1})


def test_error_detail_shapes():
    assert extract_error_detail({"detail": "out of stock"}) == "out of stock"
    assert extract_error_detail({"detail": [{"msg": "field required"}, {"msg": "bad email"}]}) == "field required; bad email"
    assert extract_error_detail({"detail": {"message": "nope"}}) == "nope"
    assert extract_error_detail({"detail": ""}) is None
    assert extract_error_detail("oops") is None
