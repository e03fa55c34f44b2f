"""
Security helpers: content API key verification and purchase download tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import bcrypt
import jwt

from core import settings

DOWNLOAD_TOKEN_TYPE = "download"


class AuthSecurityError(RuntimeError):
    pass


class InvalidDownloadToken(AuthSecurityError):
    pass


@dataclass(frozen=True)
class DownloadGrant:
    email: str
    production_id: int
    charge_id: str


def now_epoch_s() -> int:
    return int(time.time())


def hash_api_key(plain_key: str) -> str:
    key = (plain_key or "").encode("utf-8")
    if not key:
        raise AuthSecurityError("API key is empty.")
    return bcrypt.hashpw(key, bcrypt.gensalt()).decode("utf-8")


def verify_api_key(plain_key: str, key_hash: str) -> bool:
    key = (plain_key or "").encode("utf-8")
    hashed = (key_hash or "").encode("utf-8")
    if not key or not hashed:
        return False
    try:
        return bcrypt.checkpw(key, hashed)
    except ValueError:
        return False


def build_download_token(*, email: str, production_id: int, charge_id: str) -> str:
    """
    Signed token granting downloads of one purchased production.

    Tokens are emailed to the buyer and do not expire.
    """
    email = (email or "").strip()
    charge_id = (charge_id or "").strip()
    if not email or not charge_id or production_id <= 0:
        raise AuthSecurityError("Download token needs an email, a production id and a charge id.")

    payload = {
        "email": email,
        "production_id": production_id,
        "charge_id": charge_id,
        "type": DOWNLOAD_TOKEN_TYPE,
        "iat": now_epoch_s(),
    }
    return jwt.encode(
        payload,
        settings.download_token_secret(),
        algorithm=settings.download_token_algorithm(),
    )


def decode_download_token(token: str) -> DownloadGrant:
    raw = (token or "").strip()
    if not raw:
        raise InvalidDownloadToken("Download token is empty.")

    try:
        payload: dict[str, Any] = jwt.decode(
            raw,
            settings.download_token_secret(),
            algorithms=[settings.download_token_algorithm()],
        )
    except jwt.InvalidTokenError as exc:
        raise InvalidDownloadToken("Invalid download token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != DOWNLOAD_TOKEN_TYPE:
        raise InvalidDownloadToken("Token is not a download token.")

    email = str(payload.get("email") or "").strip()
    charge_id = str(payload.get("charge_id") or "").strip()
    production_id = payload.get("production_id")
    if not email or not charge_id or not isinstance(production_id, int) or production_id <= 0:
        raise InvalidDownloadToken("Download token is missing a field.")

    return DownloadGrant(email=email, production_id=production_id, charge_id=charge_id)
