"""
Auth dependencies for the content API routes.
"""

from __future__ import annotations

import logging

from fastapi import Header, HTTPException, status

from core import settings

from . import security

logger = logging.getLogger(__name__)


async def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    key_hash = settings.api_key_hash()
    if not key_hash:
        logger.error("api_key_unconfigured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="API key is not configured.",
        )

    key = (x_api_key or "").strip()
    if not key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Api-Key header.",
        )

    if not security.verify_api_key(key, key_hash):
        logger.warning("api_key_rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
        )
