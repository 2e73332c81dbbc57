"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    catalog_api_url: str = _get_env("CATALOG_API_URL", "https://api.escuelajs.co/api/v1/products")
    fetch_timeout_seconds: float = float(_get_env("FETCH_TIMEOUT_SECONDS", "15"))
    fetch_retries: int = int(_get_env("FETCH_RETRIES", "2"))
    retry_delay_seconds: float = float(_get_env("RETRY_DELAY_SECONDS", "2"))
    static_dir: str = _get_env("STATIC_DIR", str(BASE_DIR / "static"))
    host: str = _get_env("HOST", "0.0.0.0")
    port: int = int(_get_env("PORT", "3000"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
