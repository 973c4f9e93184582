"""
Fixtures pytest partagees pour les tests CineCache.

Ce module contient les fixtures communes utilisees dans les tests:
- Horloge factice pour piloter les TTL du cache
- Table de reference peuplee (genres, URLs d'images)
- Client catalogue factice route par endpoint
- Services assembles autour du client factice
"""

import asyncio
from copy import deepcopy
from typing import Any, Callable, Optional
from unittest.mock import AsyncMock

import pytest

from cinecache.adapters.api.cache import CacheStore
from cinecache.core.errors import NotFoundError
from cinecache.core.ports.api_clients import CatalogResponse, ICatalogClient
from cinecache.core.value_objects.reference_table import ReferenceTable, ReferenceTableHolder
from cinecache.services.catalog import CatalogService
from cinecache.services.enricher import EnrichmentComposer
from cinecache.services.fan_out import FanOutExecutor
from cinecache.services.lookups import LookupService
from tests.fixtures.stubs import Delayed, FakeClock
from tests.fixtures.tmdb_responses import IMAGE_BASE_URL


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reference_table() -> ReferenceTable:
    """Table de reference peuplee comme apres un chargement TMDB."""
    return ReferenceTable(
        movie_genres={28: "Action", 12: "Adventure", 18: "Drama", 878: "Science Fiction"},
        tv_genres={18: "Drama", 10765: "Sci-Fi & Fantasy"},
        languages={"en": "English", "fr": "French"},
        countries={"US": "United States of America", "FR": "France"},
        image_base_url=IMAGE_BASE_URL,
    )


@pytest.fixture
def references(reference_table: ReferenceTable) -> ReferenceTableHolder:
    return ReferenceTableHolder(reference_table)


@pytest.fixture
def make_client() -> Callable[[dict[str, Any]], AsyncMock]:
    """
    Fabrique de clients catalogue factices.

    Chaque route associe un endpoint a :
    - un payload (dict/list) renvoye tel quel
    - une exception levee a l'appel
    - un Delayed(secondes, payload ou exception)
    Un endpoint sans route leve NotFoundError, comme un 404 amont.
    """

    def factory(routes: dict[str, Any]) -> AsyncMock:
        client = AsyncMock(spec=ICatalogClient)

        async def call(endpoint: str, params: Optional[dict[str, Any]] = None) -> CatalogResponse:
            outcome = routes.get(endpoint)
            if isinstance(outcome, Delayed):
                await asyncio.sleep(outcome.seconds)
                outcome = outcome.payload
            if outcome is None:
                raise NotFoundError(f"Ressource introuvable: /{endpoint}", endpoint=endpoint)
            if isinstance(outcome, BaseException):
                raise outcome
            return CatalogResponse(data=deepcopy(outcome))

        client.call.side_effect = call
        return client

    return factory


@pytest.fixture
def make_catalog(references: ReferenceTableHolder, clock: FakeClock):
    """Fabrique d'un CatalogService complet autour d'un client factice."""

    def factory(client: AsyncMock) -> CatalogService:
        fan_out = FanOutExecutor()
        return CatalogService(
            client=client,
            references=references,
            composer=EnrichmentComposer(client, references, fan_out),
            fan_out=fan_out,
            collection_cache=CacheStore("collections", timer=clock),
            detail_cache=CacheStore("details", timer=clock),
            genre_cache=CacheStore("genres", timer=clock),
        )

    return factory


@pytest.fixture
def make_lookups(references: ReferenceTableHolder, clock: FakeClock):
    def factory(client: AsyncMock) -> LookupService:
        return LookupService(client, references, CacheStore("details", timer=clock))

    return factory
