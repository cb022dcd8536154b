import pytest

from storefront.validation import FormValidationError, build_contact_details


def test_contact_details_trims_and_drops_blank_optionals():
    contact = build_contact_details(
        {"company": "  ", "name": " Ada ", "email": "ada@example.com", "phone": "", "notes": "rush"}
    )
    assert contact.contact_name == "Ada"
    assert contact.company is None
    assert contact.contact_phone is None
    assert contact.notes == "rush"


def test_missing_name_and_email_are_reported():
    with pytest.raises(FormValidationError) as exc:
        build_contact_details({"name": "", "email": ""})
    assert set(exc.value.field_errors) == {"name", "email"}


def test_malformed_email_is_reported():
    with pytest.raises(FormValidationError) as exc:
        build_contact_details({"name": "Ada", "email": "not-an-email"})
    assert "not valid" in exc.value.field_errors["email"]
