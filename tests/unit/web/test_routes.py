"""
Tests des routes JSON (FastAPI TestClient).

Le Container DI est construit avec un client catalogue factice et une table
de reference deja peuplee ; le cycle de vie n'est execute que dans les tests
qui l'utilisent explicitement (bloc `with TestClient(...)`).
"""

from typing import Any

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from cinecache.config import Settings
from cinecache.container import Container
from cinecache.core.errors import UpstreamError, UpstreamRateLimited
from cinecache.core.value_objects.reference_table import ReferenceTableHolder
from cinecache.web.app import create_app
from tests.fixtures.stubs import RoutedCatalogClient
from tests.fixtures.tmdb_responses import (
    IMAGE_BASE_URL,
    TMDB_AIRING_TODAY_RESPONSE,
    TMDB_COLLECTION_RESPONSE,
    TMDB_COMPANY_RESPONSE,
    TMDB_CONFIGURATION_RESPONSE,
    TMDB_COUNTRIES_RESPONSE,
    TMDB_LANGUAGES_RESPONSE,
    TMDB_MOVIE_DETAILS_RESPONSE,
    TMDB_MOVIE_GENRES_RESPONSE,
    TMDB_MOVIE_KEYWORDS_RESPONSE,
    TMDB_PERSON_RESPONSE,
    TMDB_POPULAR_MOVIES_RESPONSE,
    TMDB_SIMILAR_RESPONSE,
    TMDB_TV_GENRES_RESPONSE,
)


def _build_container(routes: dict[str, Any], references: ReferenceTableHolder, **settings: Any) -> Container:
    container = Container()
    container.config.override(providers.Object(Settings(_env_file=None, **settings)))
    container.tmdb_client.override(providers.Object(RoutedCatalogClient(routes)))
    container.references.override(providers.Object(references))
    return container


@pytest.fixture
def make_app(references: ReferenceTableHolder):
    def factory(routes: dict[str, Any], **settings: Any) -> TestClient:
        container = _build_container(routes, references, **settings)
        return TestClient(create_app(container, setup_logging=False))

    return factory


class TestMovieRoutes:
    def test_collection_root(self, make_app) -> None:
        client = make_app({"movie/popular": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/")

        assert response.status_code == 200
        body = response.json()
        assert body["items"][0]["genres"] == ["Action"]
        assert body["pagination"] == {
            "current_page": 1,
            "page_size": 20,
            "has_more": True,
            "total_pages": 10,
            "total_results": 200,
        }

    def test_collection_with_query_filter(self, make_app) -> None:
        client = make_app({"search/movie": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/", params={"query": "inception"})

        assert response.status_code == 200
        assert len(response.json()["items"]) == 2

    def test_listing_routes(self, make_app) -> None:
        client = make_app({"movie/now_playing": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/now-playing", params={"page_size": 1})

        assert response.status_code == 200
        assert len(response.json()["items"]) == 1

    def test_year_route(self, make_app) -> None:
        client = make_app({"discover/movie": TMDB_POPULAR_MOVIES_RESPONSE})

        assert client.get("/movies/year/2010").status_code == 200
        assert client.get("/movies/year/1800").status_code == 400

    def test_search_route(self, make_app) -> None:
        client = make_app({"search/movie": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/search/inception")

        assert response.json()["items"][0]["title"] == "Inception"

    def test_details_basic(self, make_app) -> None:
        client = make_app({"movie/27205": TMDB_MOVIE_DETAILS_RESPONSE})

        response = client.get("/movies/27205", params={"depth": "basic"})

        assert response.status_code == 200
        body = response.json()
        assert body["genres"] == ["Action", "Science Fiction"]
        assert body["poster_url"] == f"{IMAGE_BASE_URL}w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg"

    def test_similar_route(self, make_app) -> None:
        client = make_app({"movie/27205/similar": TMDB_SIMILAR_RESPONSE})

        response = client.get("/movies/27205/similar")

        assert response.status_code == 200
        assert len(response.json()["items"]) == 8

    def test_lookup_routes(self, make_app) -> None:
        client = make_app(
            {
                "person/525": TMDB_PERSON_RESPONSE,
                "collection/263": TMDB_COLLECTION_RESPONSE,
                "company/923": TMDB_COMPANY_RESPONSE,
                "movie/27205/keywords": TMDB_MOVIE_KEYWORDS_RESPONSE,
            }
        )

        assert client.get("/movies/person/525").json()["name"] == "Christopher Nolan"
        assert client.get("/movies/collection/263").json()["parts"][0]["title"] == "Batman Begins"
        assert client.get("/movies/company/923").json()["logo_url"].endswith(".png")
        assert client.get("/movies/27205/keywords").json()[1]["name"] == "dream"

    def test_genres_aggregate(self, make_app) -> None:
        client = make_app({"discover/movie": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/genres")

        assert response.status_code == 200
        assert [genre["name"] for genre in response.json()][:2] == ["Adventure", "Drama"]


class TestSeriesRoutes:
    def test_series_listing(self, make_app) -> None:
        client = make_app({"tv/airing_today": TMDB_AIRING_TODAY_RESPONSE})

        response = client.get("/series/airing-today")

        assert response.status_code == 200
        assert response.json()["items"][0]["title"] == "Breaking Bad"

    def test_movie_only_listing_is_not_a_series_route(self, make_app) -> None:
        client = make_app({})

        # "upcoming" retombe sur /{entity_id} : identifiant invalide
        assert client.get("/series/upcoming").status_code == 400


class TestErrorMapping:
    def test_malformed_id_is_400(self, make_app) -> None:
        response = make_app({}).get("/movies/abc")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_badly_typed_query_param_is_400(self, make_app) -> None:
        response = make_app({}).get("/movies/", params={"page": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_query_with_year_is_400(self, make_app) -> None:
        client = make_app({"search/movie": TMDB_POPULAR_MOVIES_RESPONSE})

        response = client.get("/movies/", params={"query": "inception", "year": 2010})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_unknown_entity_is_404(self, make_app) -> None:
        response = make_app({}).get("/movies/999999999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_rate_limited_is_429_with_retry_after(self, make_app) -> None:
        response = make_app({"movie/popular": UpstreamRateLimited(retry_after=7)}).get("/movies/popular")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "7"
        assert response.json()["error"] == "rate_limited"

    def test_upstream_failure_is_502(self, make_app) -> None:
        response = make_app({"search/movie": UpstreamError("Erreur HTTP 500", status=500)}).get(
            "/movies/search/inception"
        )

        assert response.status_code == 502
        assert response.json()["error"] == "upstream_error"


class TestTaxonomyAndHealth:
    def test_taxonomy_routes(self, make_app) -> None:
        client = make_app({})

        genres = client.get("/taxonomy/genres").json()
        assert {"id": 28, "name": "Action"} in genres
        assert client.get("/taxonomy/languages").json()["fr"] == "French"
        assert client.get("/taxonomy/countries").json()["US"] == "United States of America"

    def test_health(self, make_app) -> None:
        body = make_app({}).get("/health").json()

        assert body["status"] == "ok"
        assert body["reference_table"] is True
        assert set(body["caches"]) == {"collections", "details", "genres"}


class TestLifespan:
    def test_startup_loads_reference_table_and_shutdown_closes_client(self) -> None:
        routes = {
            "configuration": TMDB_CONFIGURATION_RESPONSE,
            "genre/movie/list": TMDB_MOVIE_GENRES_RESPONSE,
            "genre/tv/list": TMDB_TV_GENRES_RESPONSE,
            "configuration/languages": TMDB_LANGUAGES_RESPONSE,
            "configuration/countries": TMDB_COUNTRIES_RESPONSE,
        }
        container = _build_container(routes, ReferenceTableHolder(), tmdb_api_token="test_api_key")
        app = create_app(container, setup_logging=False)

        with TestClient(app) as client:
            assert client.get("/health").json()["reference_table"] is True
            assert client.get("/taxonomy/configuration").json()["images"]["secure_base_url"] == IMAGE_BASE_URL

        assert container.tmdb_client().closed

    def test_startup_without_token_skips_loading(self, monkeypatch) -> None:
        monkeypatch.delenv("CINECACHE_TMDB_API_TOKEN", raising=False)
        container = _build_container({}, ReferenceTableHolder())
        app = create_app(container, setup_logging=False)

        with TestClient(app) as client:
            assert client.get("/health").json()["reference_table"] is False

        assert container.tmdb_client().calls == []
