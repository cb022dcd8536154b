"""Storefront error taxonomy.

Every failure an operation can hit falls into one of these groups; the
controller catches them at the operation boundary and turns them into the
status message shown on the page.
"""

from __future__ import annotations

from typing import Any, Optional


class StorefrontError(Exception):
    """Base class for storefront operation failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkFailure(StorefrontError):
    """The request never produced a usable response (connection error, timeout, bad body)."""


class ServerError(StorefrontError):
    """The backend answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ValidationGap(StorefrontError):
    """The operation was triggered without what it needs (empty cart, missing contact fields)."""


SEARCH_FAILED = "Search failed"
SEED_FAILED = "Seed failed"
ORDER_FAILED = "Order failed"
