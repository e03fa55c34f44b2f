"""
Catalog persistence (raw SQL): productions and their episodes.
"""

from __future__ import annotations

from datetime import datetime

from core import db

PRODUCTION_COLUMNS = """
    id, slug, title, description, price, status, production_type, author,
    released_on, youtube_preview, download_link, sales_price, is_featured,
    presentation_text, category, tags
"""

EPISODE_COLUMNS = """
    id, production_id, title, description, released_on, duration, slug,
    youtube_url, minutes
"""


async def get_featured() -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PRODUCTION_COLUMNS}
        FROM productions
        WHERE is_featured = true
        ORDER BY released_on DESC NULLS LAST, id DESC
        LIMIT 1
        """
    )


async def list_collection(category: str) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {PRODUCTION_COLUMNS}
        FROM productions
        WHERE category = $1
        ORDER BY released_on DESC NULLS LAST, id DESC
        """,
        category,
    )


async def list_productions() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {PRODUCTION_COLUMNS}
        FROM productions
        ORDER BY id ASC
        """
    )


async def get_production_by_id(production_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PRODUCTION_COLUMNS}
        FROM productions
        WHERE id = $1
        """,
        production_id,
    )


async def get_production_by_slug(slug: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PRODUCTION_COLUMNS}
        FROM productions
        WHERE slug = $1
        """,
        slug,
    )


async def list_episodes_for_production(production_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {EPISODE_COLUMNS}
        FROM episodes
        WHERE production_id = $1
        ORDER BY released_on ASC, id ASC
        """,
        production_id,
    )


async def list_latest_episodes(limit: int) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT e.id, e.production_id, e.title, e.description, e.released_on,
               e.duration, e.slug, e.youtube_url, e.minutes,
               p.slug AS production_slug,
               p.title AS production_title,
               CASE WHEN p.sales_price > 0 THEN p.sales_price ELSE p.price END AS price
        FROM episodes e
        JOIN productions p ON p.id = e.production_id
        ORDER BY e.released_on DESC, e.id DESC
        LIMIT $1
        """,
        limit,
    )


async def list_episodes() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {EPISODE_COLUMNS}
        FROM episodes
        ORDER BY production_id ASC, released_on ASC, id ASC
        """
    )


async def get_episode(episode_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {EPISODE_COLUMNS}
        FROM episodes
        WHERE id = $1
        """,
        episode_id,
    )


async def insert_production(
    *,
    slug: str,
    title: str,
    description: str,
    price: float,
    status: str,
    production_type: str,
    author: str,
    released_on: datetime | None,
    youtube_preview: str,
    download_link: str | None,
    sales_price: float,
    is_featured: bool,
    presentation_text: str,
    category: str,
    tags: str,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO productions (
            slug, title, description, price, status, production_type, author,
            released_on, youtube_preview, download_link, sales_price, is_featured,
            presentation_text, category, tags
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, COALESCE($8, now()), $9, $10, $11, $12, $13, $14, $15)
        RETURNING id
        """,
        slug,
        title,
        description,
        price,
        status,
        production_type,
        author,
        released_on,
        youtube_preview,
        download_link,
        sales_price,
        is_featured,
        presentation_text,
        category,
        tags,
    )
    if row is None:
        raise RuntimeError("Failed to insert production.")
    return int(row["id"])


async def update_production(
    production_id: int,
    *,
    slug: str,
    title: str,
    description: str,
    price: float,
    status: str,
    production_type: str,
    author: str,
    released_on: datetime | None,
    youtube_preview: str,
    download_link: str | None,
    sales_price: float,
    is_featured: bool,
    presentation_text: str,
    category: str,
    tags: str,
) -> bool:
    status_tag = await db.execute(
        """
        UPDATE productions
        SET slug = $2,
            title = $3,
            description = $4,
            price = $5,
            status = $6,
            production_type = $7,
            author = $8,
            released_on = COALESCE($9, released_on),
            youtube_preview = $10,
            download_link = $11,
            sales_price = $12,
            is_featured = $13,
            presentation_text = $14,
            category = $15,
            tags = $16
        WHERE id = $1
        """,
        production_id,
        slug,
        title,
        description,
        price,
        status,
        production_type,
        author,
        released_on,
        youtube_preview,
        download_link,
        sales_price,
        is_featured,
        presentation_text,
        category,
        tags,
    )
    return db.affected_rows(status_tag) > 0


async def delete_production(production_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM productions
        WHERE id = $1
        RETURNING id
        """,
        production_id,
    )
    return row is not None


async def insert_episode(
    *,
    production_id: int,
    title: str,
    description: str,
    released_on: datetime | None,
    duration: str,
    slug: str,
    youtube_url: str,
    minutes: int,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO episodes (
            production_id, title, description, released_on, duration, slug,
            youtube_url, minutes
        )
        VALUES ($1, $2, $3, COALESCE($4, now()), $5, $6, $7, $8)
        RETURNING id
        """,
        production_id,
        title,
        description,
        released_on,
        duration,
        slug,
        youtube_url,
        minutes,
    )
    if row is None:
        raise RuntimeError("Failed to insert episode.")
    return int(row["id"])


async def update_episode(
    episode_id: int,
    *,
    production_id: int,
    title: str,
    description: str,
    released_on: datetime | None,
    duration: str,
    slug: str,
    youtube_url: str,
    minutes: int,
) -> bool:
    status_tag = await db.execute(
        """
        UPDATE episodes
        SET production_id = $2,
            title = $3,
            description = $4,
            released_on = COALESCE($5, released_on),
            duration = $6,
            slug = $7,
            youtube_url = $8,
            minutes = $9
        WHERE id = $1
        """,
        episode_id,
        production_id,
        title,
        description,
        released_on,
        duration,
        slug,
        youtube_url,
        minutes,
    )
    return db.affected_rows(status_tag) > 0


async def delete_episode(episode_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM episodes
        WHERE id = $1
        RETURNING id
        """,
        episode_id,
    )
    return row is not None
