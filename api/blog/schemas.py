"""
Blog records.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Post(BaseModel):
    id: int
    slug: str
    keywords: str = ""
    title: str
    author: str = ""
    body: str = ""
    body_html: str = ""
    tag: str = ""
    tag_link: str = ""
    tag_name: str = ""
    published: datetime | None = None
    excerpt: str = ""
    first_image: str = ""
