"""
Shared fixtures.

Tests never open the database pool: the FastAPI lifespan is not entered
(TestClient is not used as a context manager) and every repository function
the routes reach is replaced with an AsyncMock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import bcrypt
import pytest
from fastapi.testclient import TestClient

from blog import repository as blog_repository
from catalog import repository as catalog_repository
from main import app
from purchases import repository as purchases_repository

API_KEY = "test-api-key"


def _dt(day: int) -> datetime:
    return datetime(2024, 3, day, 12, 0, tzinfo=timezone.utc)


def production_row(**overrides) -> dict:
    row = {
        "id": 7,
        "slug": "go-web",
        "title": "Applications web avec Go",
        "description": "<p>Construire un site en Go</p>",
        "price": 49.0,
        "status": "published",
        "production_type": "course",
        "author": "Dominic",
        "released_on": _dt(1),
        "youtube_preview": "https://www.youtube.com/embed/preview",
        "download_link": None,
        "sales_price": 0.0,
        "is_featured": True,
        "presentation_text": "<p>Présentation</p>",
        "category": "Go / Golang",
        "tags": "go,web",
    }
    row.update(overrides)
    return row


def episode_row(**overrides) -> dict:
    row = {
        "id": 70,
        "production_id": 7,
        "title": "Introduction",
        "description": "Mise en place",
        "released_on": _dt(2),
        "duration": "12:30",
        "slug": "introduction",
        "youtube_url": "https://www.youtube.com/embed/intro",
        "minutes": 12,
    }
    row.update(overrides)
    return row


def latest_row(**overrides) -> dict:
    row = episode_row(**overrides)
    row.setdefault("production_slug", "go-web")
    row.setdefault("production_title", "Applications web avec Go")
    row.setdefault("price", 49.0)
    return row


def post_row(**overrides) -> dict:
    row = {
        "id": 1,
        "slug": "Premier-Billet",
        "keywords": "go, web",
        "title": "Premier billet",
        "author": "Dominic",
        "body": '<p>Bonjour <b>tout</b> le monde</p><img class="x" src="/content/img/a.png" alt="a">',
        "tag": "golang|Go / Golang",
        "published": _dt(5),
    }
    row.update(overrides)
    return row


@pytest.fixture
def catalog_repo(monkeypatch):
    mocks = SimpleNamespace(
        get_featured=AsyncMock(return_value=production_row()),
        list_collection=AsyncMock(return_value=[production_row()]),
        list_productions=AsyncMock(return_value=[production_row()]),
        get_production_by_id=AsyncMock(return_value=production_row()),
        get_production_by_slug=AsyncMock(return_value=production_row()),
        list_episodes_for_production=AsyncMock(
            return_value=[episode_row(), episode_row(id=71, slug="routage", title="Routage", released_on=_dt(3))]
        ),
        list_latest_episodes=AsyncMock(return_value=[latest_row()]),
        list_episodes=AsyncMock(return_value=[episode_row()]),
        get_episode=AsyncMock(return_value=episode_row()),
        insert_production=AsyncMock(return_value=8),
        update_production=AsyncMock(return_value=True),
        delete_production=AsyncMock(return_value=True),
        insert_episode=AsyncMock(return_value=72),
        update_episode=AsyncMock(return_value=True),
        delete_episode=AsyncMock(return_value=True),
    )
    for name, mock in vars(mocks).items():
        monkeypatch.setattr(catalog_repository, name, mock)
    return mocks


@pytest.fixture
def blog_repo(monkeypatch):
    mocks = SimpleNamespace(
        list_latest_posts=AsyncMock(
            return_value=[
                post_row(),
                post_row(id=2, slug="second", title="Second", tag="python|Python", published=_dt(4)),
            ]
        ),
        list_posts_by_tag=AsyncMock(return_value=[post_row()]),
        get_post_by_slug=AsyncMock(return_value=post_row()),
    )
    for name, mock in vars(mocks).items():
        monkeypatch.setattr(blog_repository, name, mock)
    return mocks


@pytest.fixture
def purchases_repo(monkeypatch):
    mocks = SimpleNamespace(
        insert_purchase=AsyncMock(return_value=1),
        increase_download=AsyncMock(return_value=True),
    )
    for name, mock in vars(mocks).items():
        monkeypatch.setattr(purchases_repository, name, mock)
    return mocks


@pytest.fixture(scope="session")
def api_key_hash() -> str:
    # Low cost factor keeps the suite fast; verification works for any cost.
    return bcrypt.hashpw(API_KEY.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


@pytest.fixture
def env(monkeypatch, tmp_path, api_key_hash):
    monkeypatch.setenv("API_KEY_HASH", api_key_hash)
    monkeypatch.setenv("DOWNLOAD_TOKEN_SECRET", "test-secret")
    monkeypatch.setenv("PRODUCTS_DIR", str(tmp_path / "prods"))
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://shop.test")
    return tmp_path


@pytest.fixture
def client(env, catalog_repo, blog_repo, purchases_repo):
    """Test client with every repository mocked."""
    return TestClient(app)


@pytest.fixture
def api_headers() -> dict[str, str]:
    return {"X-Api-Key": API_KEY}
