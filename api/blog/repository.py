"""
Blog persistence (raw SQL).
"""

from __future__ import annotations

from core import db

POST_COLUMNS = "id, slug, keywords, title, author, body, tag, published"


async def list_latest_posts(limit: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {POST_COLUMNS}
        FROM blog_posts
        ORDER BY published DESC, id DESC
        LIMIT $1
        """,
        limit,
    )


async def list_posts_by_tag(tag: str, limit: int) -> list[dict]:
    # `tag` is stored as "<link>|<display name>"; match on the link part.
    return await db.fetch_all(
        f"""
        SELECT {POST_COLUMNS}
        FROM blog_posts
        WHERE upper(split_part(tag, '|', 1)) = upper($1)
        ORDER BY published DESC, id DESC
        LIMIT $2
        """,
        tag,
        limit,
    )


async def get_post_by_slug(slug: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {POST_COLUMNS}
        FROM blog_posts
        WHERE lower(slug) = lower($1)
        LIMIT 1
        """,
        slug,
    )
