"""
Contracts (data models).

This folder defines the request/response shapes for the license backend:
- License catalogue entries
- Seed results
- Order request/response formats

Both mock and real HTTP clients use these contracts, so the storefront
controller relies on stable models instead of ad-hoc dicts.
"""
