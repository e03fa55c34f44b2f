"""
Catalog business logic.

Scope:
- map SQL rows to catalog records
- production lookup by id or slug, with its ordered episodes
- collections and latest-episode listings for the pages
- save/delete operations behind the content API
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from . import categories, repository, schemas

logger = logging.getLogger(__name__)


def _to_episode(row: dict) -> schemas.Episode:
    return schemas.Episode(
        id=int(row["id"]),
        production_id=int(row["production_id"]),
        title=str(row["title"] or ""),
        description=str(row.get("description") or ""),
        released_on=row.get("released_on"),
        duration=str(row.get("duration") or ""),
        slug=str(row["slug"] or ""),
        youtube_url=str(row.get("youtube_url") or ""),
        minutes=int(row.get("minutes") or 0),
    )


def _to_episode_overview(row: dict) -> schemas.EpisodeOverview:
    episode = _to_episode(row)
    return schemas.EpisodeOverview(
        **episode.model_dump(),
        production_slug=str(row["production_slug"] or ""),
        production_title=str(row.get("production_title") or ""),
        price=float(row.get("price") or 0),
    )


def _to_production(row: dict, episodes: list[schemas.Episode] | None = None) -> schemas.Production:
    description = str(row.get("description") or "")
    presentation = str(row.get("presentation_text") or "")
    episodes = episodes or []
    return schemas.Production(
        id=int(row["id"]),
        slug=str(row["slug"] or ""),
        title=str(row["title"] or ""),
        description=description,
        description_html=description,
        presentation_text=presentation,
        presentation_html=presentation,
        price=float(row.get("price") or 0),
        sales_price=float(row.get("sales_price") or 0),
        status=str(row.get("status") or ""),
        production_type=str(row.get("production_type") or ""),
        author=str(row.get("author") or ""),
        released_on=row.get("released_on"),
        youtube_preview=str(row.get("youtube_preview") or ""),
        is_featured=bool(row.get("is_featured", False)),
        download_link=row.get("download_link"),
        category=str(row.get("category") or ""),
        tags=str(row.get("tags") or ""),
        episodes=episodes,
        episode_count=len(episodes),
        single_episode=len(episodes) == 1,
    )


async def featured() -> schemas.Production | None:
    row = await repository.get_featured()
    return _to_production(row) if row is not None else None


async def collection(slug: str) -> list[schemas.Production]:
    category = categories.slug_to_category(slug)
    if not category:
        logger.info("collection_unknown slug=%s", slug)
        return []
    rows = await repository.list_collection(category)
    return [_to_production(row) for row in rows]


async def list_productions() -> list[schemas.Production]:
    rows = await repository.list_productions()
    return [_to_production(row) for row in rows]


async def get_production(production_id: int = -1, slug: str = "") -> schemas.Production:
    """
    Fetch a production by id (when > 0) or by slug, with its episodes ordered
    by release date.

    The production row and its episodes are read by two separate queries.
    """
    if production_id > 0:
        row = await repository.get_production_by_id(production_id)
        lookup = str(production_id)
    else:
        row = await repository.get_production_by_slug((slug or "").strip())
        lookup = slug

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"production not found: {lookup}",
        )

    episode_rows = await repository.list_episodes_for_production(int(row["id"]))
    return _to_production(row, [_to_episode(r) for r in episode_rows])


def find_episode(production: schemas.Production, slug: str) -> schemas.Episode | None:
    for episode in production.episodes:
        if episode.slug == slug:
            return episode
    return None


async def latest_episodes(limit: int = 3) -> list[schemas.EpisodeOverview]:
    rows = await repository.list_latest_episodes(limit)
    return [_to_episode_overview(row) for row in rows]


async def list_episodes() -> list[schemas.Episode]:
    rows = await repository.list_episodes()
    return [_to_episode(row) for row in rows]


async def get_episode(episode_id: int) -> schemas.Episode:
    row = await repository.get_episode(episode_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"episode not found: {episode_id}",
        )
    return _to_episode(row)


def _production_fields(payload: schemas.ProductionIn) -> dict:
    return payload.model_dump(exclude={"id"})


async def save_production(payload: schemas.ProductionIn) -> tuple[bool, int]:
    """
    Update when the payload carries an id, insert otherwise.

    Returns (created, production_id).
    """
    if payload.id > 0:
        updated = await repository.update_production(payload.id, **_production_fields(payload))
        if not updated:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"production not found: {payload.id}",
            )
        logger.info("production_updated id=%s", payload.id)
        return False, payload.id

    production_id = await repository.insert_production(**_production_fields(payload))
    logger.info("production_created id=%s slug=%s", production_id, payload.slug)
    return True, production_id


async def delete_production(production_id: int) -> None:
    try:
        deleted = await repository.delete_production(production_id)
    except asyncpg.ForeignKeyViolationError as exc:
        # Purchases keep their production; sold productions cannot be deleted.
        logger.warning("production_delete_refused id=%s reason=has_purchases", production_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"production has purchases: {production_id}",
        ) from exc
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"production not found: {production_id}",
        )
    logger.info("production_deleted id=%s", production_id)


async def save_episode(payload: schemas.EpisodeIn) -> tuple[bool, int]:
    if await repository.get_production_by_id(payload.production_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"production not found: {payload.production_id}",
        )

    fields = payload.model_dump(exclude={"id"})
    if payload.id > 0:
        if not await repository.update_episode(payload.id, **fields):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"episode not found: {payload.id}",
            )
        logger.info("episode_updated id=%s", payload.id)
        return False, payload.id

    episode_id = await repository.insert_episode(**fields)
    logger.info("episode_created id=%s production_id=%s", episode_id, payload.production_id)
    return True, episode_id


async def delete_episode(episode_id: int) -> None:
    if not await repository.delete_episode(episode_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"episode not found: {episode_id}",
        )
    logger.info("episode_deleted id=%s", episode_id)
