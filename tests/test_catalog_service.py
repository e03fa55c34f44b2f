from __future__ import annotations

import asyncio

import asyncpg
import pytest
from fastapi import HTTPException

from catalog import categories, schemas, service
from conftest import episode_row, production_row


class TestCategories:
    @pytest.mark.parametrize(
        ("slug", "category"),
        [
            ("javascript-nodejs", "JavaScript / NodeJS"),
            ("NET", ".NET"),
            ("mobile", "iOS, Android, Windows Phone"),
            ("Python", "Python"),
            ("go", "Go / Golang"),
            ("autres", "Autres / Labs"),
        ],
    )
    def test_slug_to_category_is_case_insensitive(self, slug, category):
        assert categories.slug_to_category(slug) == category

    def test_category_to_slug_is_lower_case(self):
        assert categories.category_to_slug("JavaScript / NodeJS") == "javascript-nodejs"
        assert categories.category_to_slug("Go / Golang") == "go"

    def test_unknown_values_map_to_empty(self):
        assert categories.slug_to_category("cobol") == ""
        assert categories.category_to_slug("Cobol") == ""


class TestProductionRecord:
    def test_current_price_prefers_sales_price(self):
        p = schemas.Production(id=1, slug="a", title="A", price=50, sales_price=25)
        assert p.current_price == 25
        assert schemas.Production(id=1, slug="a", title="A", price=50).current_price == 50

    def test_current_price_is_serialized(self):
        p = schemas.Production(id=1, slug="a", title="A", price=50)
        assert p.model_dump()["current_price"] == 50


class TestGetProduction:
    def test_lookup_by_id_when_positive(self, catalog_repo):
        production = asyncio.run(service.get_production(7, "ignored"))
        catalog_repo.get_production_by_id.assert_awaited_once_with(7)
        catalog_repo.get_production_by_slug.assert_not_awaited()
        assert production.episode_count == 2
        assert production.single_episode is False
        assert [e.slug for e in production.episodes] == ["introduction", "routage"]

    def test_lookup_by_slug_otherwise(self, catalog_repo):
        asyncio.run(service.get_production(-1, "go-web"))
        catalog_repo.get_production_by_slug.assert_awaited_once_with("go-web")
        catalog_repo.get_production_by_id.assert_not_awaited()

    def test_single_episode_flag(self, catalog_repo):
        catalog_repo.list_episodes_for_production.return_value = [episode_row()]
        production = asyncio.run(service.get_production(7))
        assert production.single_episode is True

    def test_missing_production_raises_404(self, catalog_repo):
        catalog_repo.get_production_by_slug.return_value = None
        with pytest.raises(HTTPException) as excinfo:
            asyncio.run(service.get_production(slug="missing"))
        assert excinfo.value.status_code == 404
        assert "missing" in excinfo.value.detail

    def test_html_variants_carry_raw_markup(self, catalog_repo):
        production = asyncio.run(service.get_production(7))
        assert production.description_html == "<p>Construire un site en Go</p>"
        assert production.presentation_html == "<p>Présentation</p>"

    def test_find_episode(self, catalog_repo):
        production = asyncio.run(service.get_production(7))
        assert service.find_episode(production, "routage").id == 71
        assert service.find_episode(production, "absent") is None


class TestListings:
    def test_listed_productions_have_no_episodes(self, catalog_repo):
        productions = asyncio.run(service.list_productions())
        assert productions[0].episodes == []
        catalog_repo.list_episodes_for_production.assert_not_awaited()

    def test_latest_episodes_carry_production_slug_and_price(self, catalog_repo):
        latest = asyncio.run(service.latest_episodes(3))
        assert latest[0].production_slug == "go-web"
        assert latest[0].price == 49.0
        catalog_repo.list_latest_episodes.assert_awaited_once_with(3)

    def test_featured_none_when_missing(self, catalog_repo):
        catalog_repo.get_featured.return_value = None
        assert asyncio.run(service.featured()) is None


class TestSaveOperations:
    def test_save_production_inserts_without_id(self, catalog_repo):
        payload = schemas.ProductionIn(slug="new", title="New")
        created, production_id = asyncio.run(service.save_production(payload))
        assert (created, production_id) == (True, 8)
        kwargs = catalog_repo.insert_production.await_args.kwargs
        assert kwargs["slug"] == "new"
        assert "id" not in kwargs

    def test_save_production_updates_with_id(self, catalog_repo):
        payload = schemas.ProductionIn(id=7, slug="go-web", title="Go")
        assert asyncio.run(service.save_production(payload)) == (False, 7)
        assert catalog_repo.update_production.await_args.args == (7,)

    def test_update_of_unknown_production_raises_404(self, catalog_repo):
        catalog_repo.update_production.return_value = False
        with pytest.raises(HTTPException) as excinfo:
            asyncio.run(service.save_production(schemas.ProductionIn(id=99, slug="x", title="X")))
        assert excinfo.value.status_code == 404

    def test_delete_of_sold_production_raises_409(self, catalog_repo):
        catalog_repo.delete_production.side_effect = asyncpg.ForeignKeyViolationError(
            "purchases_production_id_fkey"
        )
        with pytest.raises(HTTPException) as excinfo:
            asyncio.run(service.delete_production(7))
        assert excinfo.value.status_code == 409
        assert excinfo.value.detail == "production has purchases: 7"

    def test_save_episode_requires_existing_production(self, catalog_repo):
        catalog_repo.get_production_by_id.return_value = None
        payload = schemas.EpisodeIn(production_id=99, title="E", slug="e")
        with pytest.raises(HTTPException) as excinfo:
            asyncio.run(service.save_episode(payload))
        assert excinfo.value.status_code == 400
        catalog_repo.insert_episode.assert_not_awaited()

    def test_row_mapping_tolerates_nulls(self):
        row = production_row(description=None, presentation_text=None, sales_price=None, tags=None)
        production = service._to_production(row)
        assert production.description == ""
        assert production.current_price == 49.0
