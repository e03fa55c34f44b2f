"""
Purchase flow.

buy():      production lookup -> Stripe charge -> purchase row -> download token
download(): token -> purchase check -> archive path

The confirmation email is sent from a background task after the response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException, status

from auth import security
from catalog import schemas as catalog_schemas
from catalog import service as catalog_service
from core import mailer, settings, stripe
from core.templating import render_email

from . import repository

PURCHASE_EMAIL_SUBJECT = "Confirmation d'achat"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    production: catalog_schemas.Production
    email: str
    charge_id: str
    token: str


def amount_in_cents(price: float) -> int:
    return int(round(price * 100))


def parse_production_id(raw: str) -> int:
    raw = (raw or "").strip()
    production_id = int(raw) if raw.isascii() and raw.isdigit() else 0
    if production_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid production id: {raw}",
        )
    return production_id


async def buy(*, source_token: str, email: str, production_id: int) -> PurchaseResult:
    email = (email or "").strip()
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required.")

    production = await catalog_service.get_production(production_id)

    charge_id = await stripe.create_charge(
        amount=amount_in_cents(production.current_price),
        currency=settings.stripe_currency(),
        description=f"Achat de {production.title}",
        source=source_token,
    )
    logger.info(
        "charge_created production_id=%s charge_id=%s amount=%s",
        production.id,
        charge_id,
        production.current_price,
    )

    await repository.insert_purchase(
        production_id=production.id,
        amount=production.current_price,
        charge_id=charge_id,
        email=email,
    )

    token = security.build_download_token(
        email=email,
        production_id=production.id,
        charge_id=charge_id,
    )
    return PurchaseResult(production=production, email=email, charge_id=charge_id, token=token)


def download_url(token: str) -> str:
    return f"{settings.public_base_url()}/download/{token}"


async def send_purchase_email(result: PurchaseResult) -> None:
    """
    BackgroundTasks entrypoint.

    The buyer has already been charged, so failures are logged, never raised.
    """
    try:
        body = render_email(
            "purchase.html",
            name=result.email,
            title=result.production.title,
            token=result.token,
            download_url=download_url(result.token),
        )
        await mailer.send_mail(result.email, PURCHASE_EMAIL_SUBJECT, body)
    except Exception:
        logger.exception(
            "purchase_email_failed email=%s production_id=%s charge_id=%s",
            result.email,
            result.production.id,
            result.charge_id,
        )


def archive_path(production_id: int) -> Path:
    return settings.products_dir() / f"{production_id}.zip"


async def download(token: str) -> tuple[int, Path]:
    """
    Validate a download token and return (production_id, archive path).
    """
    try:
        grant = security.decode_download_token(token)
    except security.InvalidDownloadToken as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    path = archive_path(grant.production_id)
    if not path.is_file():
        logger.error("download_archive_missing production_id=%s path=%s", grant.production_id, path)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Archive not found.")

    found = await repository.increase_download(
        email=grant.email,
        production_id=grant.production_id,
        charge_id=grant.charge_id,
    )
    if not found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Purchase not found.")

    logger.info("download_granted production_id=%s charge_id=%s", grant.production_id, grant.charge_id)
    return grant.production_id, path
