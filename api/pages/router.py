"""
Static informational pages.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from catalog import service as catalog_service
from core.templating import PageData, render

router = APIRouter()


@router.get("/contact", response_class=HTMLResponse)
async def contact(request: Request) -> Response:
    latest = await catalog_service.latest_episodes(3)
    return render(request, "contact.html", PageData(title="Contact", latest_episodes=latest))


@router.get("/docs/privacy", response_class=HTMLResponse)
async def privacy(request: Request) -> Response:
    latest = await catalog_service.latest_episodes(3)
    return render(
        request,
        "privacy.html",
        PageData(title="Condition de vie privée", latest_episodes=latest),
    )


@router.get("/error", response_class=HTMLResponse)
async def error(request: Request) -> Response:
    # No database access: this page must render when the database is down.
    return render(request, "error.html", PageData(title="Une erreur est survenue"))
