"""
Blog business logic: post mapping plus the derived fields the pages use
(excerpt, first image, tag parts).
"""

from __future__ import annotations

import html
import logging
import re

from . import repository, schemas

LATEST_POSTS_LIMIT = 50
EXCERPT_CHARS = 200

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")
_IMG_RE = re.compile(r"<img.*?src=\"(.*?)\"[^>]*>", re.IGNORECASE | re.DOTALL)

logger = logging.getLogger(__name__)


def excerpt(body: str, max_chars: int = EXCERPT_CHARS) -> str:
    """
    Plain-text summary of a post body, cut on a word boundary.
    """
    text = html.unescape(_TAG_RE.sub(" ", body or ""))
    text = _SPACE_RE.sub(" ", text).strip()
    if len(text) <= max_chars:
        return text

    cut = text[:max_chars]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"


def first_image(body: str) -> str:
    match = _IMG_RE.search(body or "")
    return match.group(1) if match else ""


def split_tag(tag: str) -> tuple[str, str]:
    """
    "<link>|<display name>" -> (link, display name).

    A tag without a display part is displayed as its link.
    """
    link, sep, name = (tag or "").partition("|")
    link = link.strip()
    return link, (name.strip() if sep else link)


def tags_from_posts(posts: list[schemas.Post]) -> dict[str, str]:
    tags: dict[str, str] = {}
    for post in posts:
        if post.tag_link and post.tag_link not in tags:
            tags[post.tag_link] = post.tag_name
    return tags


def _to_post(row: dict) -> schemas.Post:
    body = str(row.get("body") or "")
    tag = str(row.get("tag") or "")
    tag_link, tag_name = split_tag(tag)
    return schemas.Post(
        id=int(row["id"]),
        slug=str(row["slug"] or ""),
        keywords=str(row.get("keywords") or ""),
        title=str(row["title"] or ""),
        author=str(row.get("author") or ""),
        body=body,
        body_html=body,
        tag=tag,
        tag_link=tag_link,
        tag_name=tag_name,
        published=row.get("published"),
        excerpt=excerpt(body),
        first_image=first_image(body),
    )


async def latest_posts(limit: int = LATEST_POSTS_LIMIT) -> list[schemas.Post]:
    rows = await repository.list_latest_posts(limit)
    return [_to_post(row) for row in rows]


async def posts_by_tag(tag: str, limit: int = LATEST_POSTS_LIMIT) -> list[schemas.Post]:
    rows = await repository.list_posts_by_tag(tag, limit)
    if not rows:
        logger.info("blog_tag_not_found tag=%s", tag)
    return [_to_post(row) for row in rows]


async def get_post(slug: str) -> schemas.Post | None:
    row = await repository.get_post_by_slug(slug)
    return _to_post(row) if row is not None else None
