from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from storefront.integrations.contracts.licenses import License, OrderResult, SeedResult


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


def normalize_license_list(raw: Any) -> List[License]:
    if not isinstance(raw, list):
        raise IntegrationResponseError(
            f"Expected a list of licenses, got {type(raw).__name__}.",
            payload=raw,
        )
    return [normalize_license(entry) for entry in raw]


def normalize_license(raw: Any) -> License:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"License entry must be an object, got {raw!r}.", payload=raw)

    features = raw.get("features") or []
    if not isinstance(features, list):
        raise IntegrationResponseError(f"License features must be a list; got {features!r}.", payload=raw)

    return _build_model(
        License,
        {
            "sku": str(_first_non_empty(raw, "sku", "id")),
            "name": str(_first_non_empty(raw, "name", "title")),
            "price": _coerce_amount(_first_non_empty(raw, "price", "unit_price"), "license price"),
            "duration_months": raw.get("duration_months") or 0,
            "tier": raw.get("tier") or None,
            "features": [str(f) for f in features],
        },
        raw,
    )


def normalize_seed_response(raw: Any) -> SeedResult:
    if not isinstance(raw, dict):
        # A bare body still counts as a completed seed; the summary falls back to the count.
        return SeedResult()
    inserted = raw.get("inserted")
    if inserted is not None:
        try:
            inserted = int(inserted)
        except (TypeError, ValueError):
            inserted = None
    message = raw.get("message")
    return SeedResult(message=str(message) if message else None, inserted=inserted)


def normalize_order_result(raw: Any) -> OrderResult:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Order response must be an object.", payload=raw)
    order_id = _first_non_empty(raw, "order_id", "orderId", "id")
    total = _coerce_amount(_first_non_empty(raw, "total", "amount", default=0), "order total")
    return _build_model(
        OrderResult,
        {"order_id": str(order_id), "total": total, "raw": raw},
        raw,
    )


def extract_error_detail(raw: Any) -> Optional[str]:
    """Pull a human-readable error out of a failed backend response body.

    Handles plain ``{"detail": "..."}`` bodies as well as FastAPI's validation
    shape ``{"detail": [{"msg": "..."}, ...]}``.
    """
    if not isinstance(raw, dict):
        return None
    detail = raw.get("detail")
    if isinstance(detail, str):
        return detail.strip() or None
    if isinstance(detail, list):
        messages = [str(d.get("msg")) for d in detail if isinstance(d, dict) and d.get("msg")]
        return "; ".join(messages) or None
    if isinstance(detail, dict):
        message = detail.get("message")
        return str(message) if message else None
    return None


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _coerce_amount(value: Any, label: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise IntegrationResponseError(f"Invalid {label}: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise IntegrationResponseError(f"{label.capitalize()} must be >= 0; got {value!r}.")
    return amount


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
