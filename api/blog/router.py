"""
Server-rendered blog pages.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from catalog import service as catalog_service
from core.templating import PageData, render

from . import service

router = APIRouter(prefix="/blog")


@router.get("", response_class=HTMLResponse)
@router.get("/tag/", response_class=HTMLResponse, include_in_schema=False)
async def blog(request: Request) -> Response:
    posts = await service.latest_posts()
    latest = await catalog_service.latest_episodes(6)
    return render(
        request,
        "blog.html",
        PageData(
            title="Blogue",
            latest_episodes=latest,
            posts=posts,
            tags=service.tags_from_posts(posts),
        ),
    )


@router.get("/tag/{tag}", response_class=HTMLResponse)
async def blog_tag(request: Request, tag: str) -> Response:
    posts = await service.posts_by_tag(tag)
    all_posts = await service.latest_posts()
    latest = await catalog_service.latest_episodes(6)
    return render(
        request,
        "blog.html",
        PageData(
            title=f"Blogue: {tag}",
            latest_episodes=latest,
            posts=posts,
            tags=service.tags_from_posts(all_posts),
        ),
    )


@router.get("/show", include_in_schema=False)
@router.get("/show/", include_in_schema=False)
async def blog_entry_without_slug() -> Response:
    return RedirectResponse("/blog", status_code=status.HTTP_301_MOVED_PERMANENTLY)


@router.get("/show/{slug}", response_class=HTMLResponse)
async def blog_entry(request: Request, slug: str) -> Response:
    entry = await service.get_post(slug)
    if entry is None:
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)

    posts = await service.latest_posts()
    latest = await catalog_service.latest_episodes(50)
    return render(
        request,
        "post.html",
        PageData(
            title=entry.title,
            latest_episodes=latest,
            entry=entry,
            tags=service.tags_from_posts(posts),
        ),
    )
