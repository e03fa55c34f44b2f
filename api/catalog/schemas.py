"""
Catalog records (productions, episodes) and API payloads.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, computed_field


class Episode(BaseModel):
    id: int
    production_id: int
    title: str
    description: str = ""
    released_on: datetime | None = None
    duration: str = ""
    slug: str
    youtube_url: str = ""
    minutes: int = 0


class EpisodeOverview(Episode):
    """
    Episode joined with the production it belongs to.
    """

    production_slug: str
    production_title: str = ""
    price: float = 0.0


class Production(BaseModel):
    id: int
    slug: str
    title: str
    description: str = ""
    description_html: str = ""
    presentation_text: str = ""
    presentation_html: str = ""
    price: float = 0.0
    sales_price: float = 0.0
    status: str = ""
    production_type: str = ""
    author: str = ""
    released_on: datetime | None = None
    youtube_preview: str = ""
    is_featured: bool = False
    download_link: str | None = None
    category: str = ""
    tags: str = ""
    episodes: list[Episode] = Field(default_factory=list)
    episode_count: int = 0
    single_episode: bool = False

    @computed_field
    @property
    def current_price(self) -> float:
        return self.sales_price if self.sales_price > 0 else self.price


class ProductionIn(BaseModel):
    id: int = Field(default=0, ge=0)
    slug: str = Field(..., min_length=1, max_length=200)
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    presentation_text: str = ""
    price: float = Field(default=0.0, ge=0)
    sales_price: float = Field(default=0.0, ge=0)
    status: str = ""
    production_type: str = ""
    author: str = ""
    released_on: datetime | None = None
    youtube_preview: str = ""
    is_featured: bool = False
    download_link: str | None = None
    category: str = ""
    tags: str = ""


class EpisodeIn(BaseModel):
    id: int = Field(default=0, ge=0)
    production_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    released_on: datetime | None = None
    duration: str = ""
    slug: str = Field(..., min_length=1, max_length=200)
    youtube_url: str = ""
    minutes: int = Field(default=0, ge=0)
