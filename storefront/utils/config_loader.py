"""
Configuration loader for the storefront
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:8000"


class StorefrontConfig(BaseModel):
    """Storefront runtime configuration"""

    backend_url: str = DEFAULT_BACKEND_URL
    vendor: str = "Saad"
    timeout_seconds: float = Field(default=15.0, gt=0, le=300)
    integrations_mode: str = "real"
    brand_name: str = "NWTech Services"
    session_cookie: str = "storefront_session"
    session_ttl_seconds: int = Field(default=1800, ge=60)
    max_sessions: int = Field(default=10000, ge=1)

    @field_validator("backend_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/") or DEFAULT_BACKEND_URL

    @field_validator("integrations_mode")
    @classmethod
    def _normalize_mode(cls, v: str) -> str:
        mode = v.strip().lower()
        if mode in {"mock", "test", "local"}:
            return "mock"
        if mode in {"", "real", "live"}:
            return "real"
        raise ValueError(f"Unsupported INTEGRATIONS_MODE '{v}' (expected 'real' or 'mock')")

    @property
    def use_mock_backend(self) -> bool:
        return self.integrations_mode == "mock"


def _get_env(*keys: str) -> Optional[str]:
    for k in keys:
        v = os.getenv(k)
        if v is not None and v.strip() != "":
            return v.strip()
    return None


def load_storefront_config(load_env_file: bool = True) -> StorefrontConfig:
    """
    Build the storefront configuration from the environment (and .env).

    Returns:
        Validated StorefrontConfig object

    Raises:
        ValidationError: If a setting has an invalid value
    """
    if load_env_file:
        load_dotenv()

    values = {
        "backend_url": _get_env("STOREFRONT_BACKEND_URL", "BACKEND_URL", "VITE_BACKEND_URL"),
        "vendor": _get_env("STOREFRONT_VENDOR"),
        "timeout_seconds": _get_env("STOREFRONT_TIMEOUT_SECONDS"),
        "integrations_mode": _get_env("INTEGRATIONS_MODE"),
        "brand_name": _get_env("STOREFRONT_BRAND_NAME"),
        "session_ttl_seconds": _get_env("STOREFRONT_SESSION_TTL_SECONDS"),
        "max_sessions": _get_env("STOREFRONT_MAX_SESSIONS"),
    }

    try:
        config = StorefrontConfig(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        logger.error(f"Storefront config validation failed: {e}")
        raise
    logger.info(f"Storefront backend: {config.backend_url} (mode={config.integrations_mode})")
    return config
