"""
Utility helpers for the storefront.

Modules:
- config_loader: environment-driven StorefrontConfig
"""
