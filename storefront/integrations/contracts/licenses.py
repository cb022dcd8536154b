"""
License catalogue and order contracts.

Shapes exchanged with the license/order backend:
- License entries returned by catalogue search
- Seed results
- Order requests and order results

Both clients/mocks/local_license_api.py and clients/real_http/license_api.py
produce and consume these models, so the controller never handles raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIER = "Standard"


class License(BaseModel):
    """A catalogue entry. Immutable once fetched."""

    model_config = ConfigDict(frozen=True)

    sku: str
    name: str
    price: Decimal = Field(ge=0)
    duration_months: int = 0
    tier: Optional[str] = None
    features: List[str] = Field(default_factory=list)

    @property
    def display_tier(self) -> str:
        return self.tier or DEFAULT_TIER


@dataclass
class CartItem:
    """A license snapshot held in the cart with its quantity (>= 1)."""

    license: License
    quantity: int = 1

    @property
    def sku(self) -> str:
        return self.license.sku

    @property
    def subtotal(self) -> Decimal:
        return self.license.price * self.quantity


class OrderItem(BaseModel):
    sku: str
    name: str
    quantity: int = Field(ge=1)
    unit_price: Decimal
    subtotal: Decimal


class OrderRequest(BaseModel):
    company: Optional[str] = None
    contact_name: str
    contact_email: str
    contact_phone: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for POST /api/orders. Empty optional fields are left out."""
        payload: Dict[str, Any] = {
            "contact_name": self.contact_name,
            "contact_email": self.contact_email,
            "items": [
                {
                    "sku": item.sku,
                    "name": item.name,
                    "quantity": item.quantity,
                    "unit_price": float(item.unit_price),
                    "subtotal": float(item.subtotal),
                }
                for item in self.items
            ],
        }
        for key in ("company", "contact_phone", "notes"):
            value = getattr(self, key)
            if value:
                payload[key] = value
        return payload


class OrderResult(BaseModel):
    order_id: str
    total: Decimal
    raw: Dict[str, Any] = Field(default_factory=dict)


class SeedResult(BaseModel):
    message: Optional[str] = None
    inserted: Optional[int] = None

    @property
    def summary(self) -> str:
        return self.message or f"Seeded {self.inserted or 0} items"
