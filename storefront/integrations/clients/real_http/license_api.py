"""
Real License Backend HTTP Client.

Purpose:
- Searches the license catalogue, triggers demo seeding and submits orders
  against the external license/order API
- Normalizes responses into the contracts under storefront/integrations/contracts

Usage:
- Wired in storefront/api/main.py unless INTEGRATIONS_MODE selects the mock
- Called by StorefrontController through the LicenseCatalogClient interface

Important:
- This client is the ONLY place that talks HTTP to the license backend.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from storefront.errors import ORDER_FAILED, SEARCH_FAILED, SEED_FAILED, NetworkFailure, ServerError
from storefront.integrations.contracts.interfaces import LicenseCatalogClient
from storefront.integrations.contracts.licenses import License, OrderRequest, OrderResult, SeedResult
from storefront.integrations.response_wrappers import (
    extract_error_detail,
    normalize_license_list,
    normalize_order_result,
    normalize_seed_response,
)

logger = logging.getLogger(__name__)


class LicenseApiClient(LicenseCatalogClient):
    def __init__(
        self,
        base_url: str,
        timeout_seconds: Optional[float] = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    async def search_licenses(self, query: Optional[str], vendor: str) -> List[License]:
        params: Dict[str, str] = {}
        if query:
            params["q"] = query
        params["vendor"] = vendor

        url = f"{self.base_url}/api/licenses"
        logger.info("Searching licenses: q=%r vendor=%s", query, vendor)
        response = await self._send("GET", url, params=params)
        if not response.is_success:
            logger.warning("License search returned status=%s", response.status_code)
            raise ServerError(SEARCH_FAILED, status_code=response.status_code)
        return normalize_license_list(self._decode(response))

    async def seed_catalog(self) -> SeedResult:
        url = f"{self.base_url}/api/licenses/seed"
        logger.info("Seeding license catalogue via %s", url)
        response = await self._send("POST", url)
        if not response.is_success:
            logger.warning("Catalogue seed returned status=%s", response.status_code)
            raise ServerError(SEED_FAILED, status_code=response.status_code)
        return normalize_seed_response(self._decode(response) if response.content else {})

    async def place_order(self, request: OrderRequest) -> OrderResult:
        url = f"{self.base_url}/api/orders"
        payload = request.to_payload()
        logger.info("Placing order: items=%d", len(payload["items"]))
        response = await self._send("POST", url, json=payload)

        if not response.is_success:
            try:
                detail = extract_error_detail(response.json())
            except ValueError:
                detail = None
            logger.warning("Order rejected: status=%s detail=%r", response.status_code, detail)
            raise ServerError(detail or ORDER_FAILED, status_code=response.status_code, detail=detail)

        result = normalize_order_result(self._decode(response))
        logger.info("Order accepted: order_id=%s total=%s", result.order_id, result.total)
        return result

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Timed out calling license backend %s %s: %s", method, url, exc)
            raise NetworkFailure("Request timed out") from exc
        except httpx.RequestError as exc:
            logger.error("Request error calling license backend %s %s: %s", method, url, exc)
            raise NetworkFailure(str(exc) or "Network error") from exc

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkFailure(f"Invalid JSON from backend (status {response.status_code})") from exc
