"""
Environment-driven settings.

Values are read on every call, not snapshotted at import time, so a running
process and the tests both see the current environment.
"""

from __future__ import annotations

import os
from pathlib import Path

API_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_PORT = 8081
DEFAULT_STRIPE_API_BASE = "https://api.stripe.com"
DEFAULT_CURRENCY = "cad"
DEFAULT_PUBLIC_BASE_URL = "http://localhost:8081"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def database_url() -> str:
    # FOCUS_SQL is the historical name of the connection string.
    return _env_str("DATABASE_URL") or _env_str("FOCUS_SQL")


def db_pool_size() -> int:
    size = _env_int("DB_POOL_MAX_SIZE", 5)
    return size if size > 0 else 5


def http_port() -> int:
    return _env_int("HTTP_PLATFORM_PORT", DEFAULT_PORT)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def stripe_secret_key() -> str:
    return _env_str("STRIPE_SECRET_KEY") or _env_str("STRIPE")


def stripe_api_base() -> str:
    return _env_str("STRIPE_API_BASE", DEFAULT_STRIPE_API_BASE)


def stripe_currency() -> str:
    return _env_str("STRIPE_CURRENCY", DEFAULT_CURRENCY).lower()


def api_key_hash() -> str:
    return _env_str("API_KEY_HASH")


def download_token_secret() -> str:
    # Local default keeps development simple.
    # In production, set DOWNLOAD_TOKEN_SECRET in environment.
    return _env_str("DOWNLOAD_TOKEN_SECRET", "dev-change-this-secret")


def download_token_algorithm() -> str:
    return _env_str("DOWNLOAD_TOKEN_ALG", "HS256")


def smtp_host() -> str:
    return _env_str("SMTP_HOST")


def smtp_port() -> int:
    return _env_int("SMTP_PORT", 587)


def smtp_username() -> str:
    return _env_str("SMTP_USERNAME")


def smtp_password() -> str:
    return _env_str("SMTP_PASSWORD")


def mail_from() -> str:
    return _env_str("MAIL_FROM") or smtp_username()


def public_base_url() -> str:
    return _env_str("PUBLIC_BASE_URL", DEFAULT_PUBLIC_BASE_URL).rstrip("/")


def views_dir() -> Path:
    raw = _env_str("VIEWS_DIR")
    return Path(raw) if raw else API_ROOT / "views"


def content_dir() -> Path:
    return Path(_env_str("CONTENT_DIR", "content"))


def products_dir() -> Path:
    return Path(_env_str("PRODUCTS_DIR", "prods"))
