"""
Checkout and download endpoints.
"""

from __future__ import annotations

import logging

import asyncpg
import httpx
from fastapi import APIRouter, BackgroundTasks, Form, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, Response

from auth import security
from catalog import service as catalog_service
from core import stripe
from core.templating import PageData, redirect_to_error, render

from . import service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/buy", response_class=HTMLResponse)
async def buy(
    request: Request,
    background_tasks: BackgroundTasks,
    stripe_token: str = Form(default="", alias="stripeToken"),
    stripe_email: str = Form(default="", alias="stripeEmail"),
    production_id: str = Form(default="", alias="id"),
) -> Response:
    try:
        result = await service.buy(
            source_token=stripe_token,
            email=stripe_email,
            production_id=service.parse_production_id(production_id),
        )
    except HTTPException as exc:
        logger.warning("buy_failed production_id=%s detail=%s", production_id, exc.detail)
        return redirect_to_error()
    except (stripe.StripeError, httpx.HTTPError, security.AuthSecurityError) as exc:
        logger.error("buy_failed production_id=%s error=%s", production_id, exc)
        return redirect_to_error()
    except asyncpg.PostgresError:
        logger.exception("buy_failed production_id=%s email=%s", production_id, stripe_email)
        return redirect_to_error()

    background_tasks.add_task(service.send_purchase_email, result)

    latest = await catalog_service.latest_episodes(3)
    return render(
        request,
        "confirm.html",
        PageData(
            title="Confirmation d'achat",
            current_production=result.production,
            latest_episodes=latest,
        ),
    )


@router.get("/download/", include_in_schema=False)
async def download_without_token() -> Response:
    return redirect_to_error()


@router.get("/download/{token}")
async def download(token: str) -> Response:
    try:
        production_id, path = await service.download(token)
    except HTTPException as exc:
        logger.warning("download_failed detail=%s", exc.detail)
        return redirect_to_error()

    return FileResponse(
        path,
        media_type="application/octet-stream",
        filename=f"{production_id}.zip",
        headers={
            "Content-Transfer-Encoding": "binary",
            "Expires": "0",
        },
    )
