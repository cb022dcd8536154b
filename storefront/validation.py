"""Validation for storefront form submissions.

The page posts raw form fields. These helpers turn them into typed inputs
before any order is built, so the controller only ever sees clean values.

On validation failure, raise `FormValidationError` so the API can answer
HTTP 422 with structured `field_errors`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ContactDetails:
    contact_name: str
    contact_email: str
    company: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Mapping[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def optional_str(payload: Mapping[str, Any], field: str) -> Optional[str]:
    return _strip(payload.get(field)) or None


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: str, errors: Dict[str, str], field: str = "email") -> str:
    value = _strip(value)
    if not value:
        add_error(errors, field, "Contact email is required")
        return value
    if not _EMAIL_RE.match(value):
        add_error(errors, field, "Contact email is not valid")
    return value


def build_contact_details(form: Mapping[str, Any]) -> ContactDetails:
    """Validate the order form fields (company, name, email, phone, notes)."""
    errors: Dict[str, str] = {}
    name = require_str(form, "name", errors, label="Contact name")
    email = validate_email(form.get("email"), errors, field="email")
    if errors:
        raise FormValidationError(field_errors=errors, message="Please fill in the required contact details")
    return ContactDetails(
        contact_name=name,
        contact_email=email,
        company=optional_str(form, "company"),
        contact_phone=optional_str(form, "phone"),
        notes=optional_str(form, "notes"),
    )
