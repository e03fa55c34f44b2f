"""
Server-rendered catalog pages.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from core.templating import PageData, redirect_to_error, render

from . import categories, service

HOME_TITLE = "Focus Centric - Formations video techniques"

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> Response:
    production = await service.featured()
    latest = await service.latest_episodes(3)
    return render(
        request,
        "index.html",
        PageData(title=HOME_TITLE, current_production=production, latest_episodes=latest),
    )


@router.get("/collections/{category}", response_class=HTMLResponse)
async def collections(request: Request, category: str) -> Response:
    productions = await service.collection(category)
    latest = await service.latest_episodes(3)
    return render(
        request,
        "collections.html",
        PageData(
            title=f"Formations: {category}",
            sub_title=category,
            productions=productions,
            latest_episodes=latest,
        ),
    )


@router.get("/production/{slug}", response_class=HTMLResponse)
async def production(request: Request, slug: str) -> Response:
    try:
        current = await service.get_production(slug=slug)
    except HTTPException as exc:
        logger.warning("production_page_failed slug=%s detail=%s", slug, exc.detail)
        return redirect_to_error()

    latest = await service.latest_episodes(3)
    return render(
        request,
        "production.html",
        PageData(
            title=current.title,
            sub_title=categories.category_to_slug(current.category),
            current_production=current,
            latest_episodes=latest,
        ),
    )


@router.get("/episode/{slug}", response_class=HTMLResponse)
async def episode(request: Request, slug: str, id: str | None = None) -> Response:
    raw_id = (id or "").strip()
    if not (raw_id.isascii() and raw_id.isdigit()):
        logger.warning("episode_page_failed slug=%s reason=missing_production_id", slug)
        return redirect_to_error()

    try:
        current_production = await service.get_production(int(raw_id))
    except HTTPException as exc:
        logger.warning("episode_page_failed slug=%s detail=%s", slug, exc.detail)
        return redirect_to_error()

    current = service.find_episode(current_production, slug)
    if current is None:
        logger.warning(
            "episode_page_failed slug=%s production_id=%s reason=episode_not_found",
            slug,
            current_production.id,
        )
        return redirect_to_error()

    latest = await service.latest_episodes(3)
    return render(
        request,
        "episode.html",
        PageData(
            title=current.title,
            current_episode=current,
            current_production=current_production,
            latest_episodes=latest,
        ),
    )


@router.get("/recent", response_class=HTMLResponse)
async def recent(request: Request) -> Response:
    latest = await service.latest_episodes(50)
    return render(request, "recent.html", PageData(title="Récemment publiés", latest_episodes=latest))
