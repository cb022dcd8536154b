#!/usr/bin/env python3
"""
Run a full search → seed → cart → order walk-through and print each stage to the terminal.
Shows the catalog, the cart panel and the status message after every step.

Usage (from repo root):
  python scripts/run_storefront_demo.py            # in-memory mock backend
  python scripts/run_storefront_demo.py --real     # backend at STOREFRONT_BACKEND_URL
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from storefront.controller import StorefrontController
from storefront.integrations.clients.mocks.local_license_api import MockLicenseApiClient
from storefront.integrations.clients.real_http.license_api import LicenseApiClient
from storefront.state import StorefrontState
from storefront.utils.config_loader import load_storefront_config
from storefront.validation import build_contact_details
from storefront.view import build_view


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


async def main(use_real: bool):
    setup_logging()
    cfg = load_storefront_config()
    if use_real:
        client = LicenseApiClient(base_url=cfg.backend_url, timeout_seconds=cfg.timeout_seconds)
    else:
        client = MockLicenseApiClient(vendor=cfg.vendor)

    state = StorefrontState()
    controller = StorefrontController(state, client, vendor=cfg.vendor)

    # --- Initial search (empty catalogue on a fresh mock) ---
    await controller.search("")
    print_stage("SEARCH: initial catalog", build_view(state))

    # --- Seed and refresh ---
    await controller.seed()
    print_stage("SEED: catalog after seeding", build_view(state))

    if not state.catalog:
        print_stage("STOP", "Catalog is still empty; nothing to order.")
        return

    # --- Cart ---
    first = state.catalog[0]
    controller.add_to_cart(first.sku)
    controller.add_to_cart(first.sku)
    if len(state.catalog) > 1:
        controller.add_to_cart(state.catalog[1].sku)
    print_stage("CART: after adding items", build_view(state)["cart"])

    # --- Order ---
    contact = build_contact_details(
        {"company": "Demo Co", "name": "Demo Buyer", "email": "buyer@example.com", "notes": "demo order"}
    )
    result = await controller.place_order(contact)
    print_stage("ORDER: result", result.model_dump() if result else state.message)
    print_stage("ORDER: page after submission", build_view(state))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Storefront walk-through")
    parser.add_argument("--real", action="store_true", help="Use the real license backend")
    args = parser.parse_args()
    asyncio.run(main(args.real))
