"""
Service catalogue : collections paginees, recherche, fiches enrichies.

CatalogService relie le cache, la strategie de secours, la table de
reference et le composeur d'enrichissement pour exposer les operations
consommees par la couche HTTP.

Flux d'une collection:
1. Cle de cache depuis (media, liste, page, taille, filtres)
2. Cache hit -> elements en cache, has_more optimiste
3. Cache miss -> appel principal (+ secours pour les listes standard)
4. Mapping par la table de reference, mise en cache si non vide
5. Pagination exacte depuis la reponse amont
"""

from typing import Any, Optional

from loguru import logger

from cinecache.adapters.api.cache import CacheStore, build_cache_key
from cinecache.adapters.api.fallback import fetch_with_fallback
from cinecache.adapters.api.schemas import MediaPage, parse_payload
from cinecache.core.errors import NotFoundError, ValidationError
from cinecache.core.ports.api_clients import CatalogResponse, ICatalogClient
from cinecache.core.value_objects.enrichment import EnrichmentDepth, SubFetchSpec
from cinecache.core.value_objects.media import (
    CollectionFilters,
    CollectionPage,
    Listing,
    MediaKind,
    Pagination,
    Relation,
)
from cinecache.core.value_objects.reference_table import ReferenceTable, ReferenceTableHolder
from cinecache.services.enricher import EnrichmentComposer
from cinecache.services.fan_out import FanOutExecutor
from cinecache.services.mapping import map_items
from cinecache.services.parameters import (
    validate_entity_id,
    validate_page,
    validate_page_size,
    validate_query,
    validate_year,
)


class CatalogService:
    """
    Operations de lecture du catalogue avec cache en lecture directe.

    Attributes:
        DEFAULT_PAGE_SIZE: Taille de page par defaut (taille native TMDB)
        GENRE_ITEMS_LIMIT: Nombre d'elements conserves par genre

    Example:
        page = await catalog.get_collection("movie", page=2)
        print(page.pagination.has_more, len(page.items))

        movie = await catalog.get_entity_details(27205, "detailed")
    """

    DEFAULT_PAGE_SIZE = 20
    GENRE_ITEMS_LIMIT = 20

    def __init__(
        self,
        client: ICatalogClient,
        references: ReferenceTableHolder,
        composer: EnrichmentComposer,
        fan_out: FanOutExecutor,
        collection_cache: CacheStore,
        detail_cache: CacheStore,
        genre_cache: CacheStore,
    ) -> None:
        """
        Initialise le service catalogue.

        Args:
            client: Client de l'API catalogue
            references: Acces a la table de reference courante
            composer: Composeur d'enrichissement des fiches
            fan_out: Executeur des sous-requetes paralleles
            collection_cache: Cache du domaine collections
            detail_cache: Cache du domaine fiches
            genre_cache: Cache des agregats par genre
        """
        self._client = client
        self._references = references
        self._composer = composer
        self._fan_out = fan_out
        self._collections = collection_cache
        self._details = detail_cache
        self._genres = genre_cache

    # --- Collections ----------------------------------------------------------

    async def get_collection(
        self,
        media: MediaKind | str = MediaKind.MOVIE,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        filters: Optional[CollectionFilters | dict[str, Any]] = None,
        listing: Listing | str = Listing.POPULAR,
    ) -> CollectionPage:
        """
        Recupere une page de collection.

        Sans filtre, interroge la liste standard `listing` (avec secours).
        Un filtre query route vers la recherche, un filtre year/genre_id vers
        discover ; ces deux endpoints n'ont pas de secours. query ne se combine pas
        avec year ou genre_id.

        Args:
            media: Type de media ("movie" ou "tv")
            page: Numero de page (1..500)
            page_size: Nombre maximum d'elements rendus (1..100)
            filters: Filtres optionnels (query, year, genre_id)
            listing: Liste standard quand aucun filtre n'est donne

        Returns:
            CollectionPage avec les elements mappes et la pagination

        Raises:
            ValidationError: Parametre invalide, ou query combine a year/genre_id
            UpstreamRateLimited: L'API amont limite les appels
            UpstreamError: Echec amont (apres secours eventuel)
        """
        media = MediaKind.parse(media)
        page = validate_page(page)
        page_size = validate_page_size(page_size)
        if not isinstance(filters, CollectionFilters):
            filters = CollectionFilters.from_mapping(filters)
        if filters.query is not None and filters.is_discover:
            raise ValidationError("query ne se combine pas avec year ou genre_id")

        if filters.query is not None:
            filters = CollectionFilters(query=validate_query(filters.query))
            label = "search"
            endpoint = f"search/{media.value}"
            params: dict[str, Any] = {"query": filters.query, "page": page}
            fallback_endpoint = None
        elif filters.is_discover:
            year = validate_year(filters.year) if filters.year is not None else None
            genre_id = (
                validate_entity_id(filters.genre_id, "genre") if filters.genre_id is not None else None
            )
            filters = CollectionFilters(year=year, genre_id=genre_id)
            label = "discover"
            endpoint = f"discover/{media.value}"
            params = {
                media.year_param: year,
                "with_genres": genre_id,
                "sort_by": "popularity.desc",
                "page": page,
            }
            fallback_endpoint = None
        else:
            listing = Listing.parse(listing, media)
            label = listing.value
            endpoint = f"{media.value}/{listing.value}"
            params = {"page": page}
            fallback_endpoint = f"{media.value}/{listing.fallback.value}"

        cache_key = build_cache_key(
            media.value, label, page=page, page_size=page_size, **filters.as_key_parts()
        )
        return await self._cached_page(cache_key, media, page, page_size, endpoint, params, fallback_endpoint)

    async def search_collection(
        self,
        media: MediaKind | str,
        query: str,
        page: int = 1,
    ) -> CollectionPage:
        """Recherche textuelle paginee (voir get_collection)."""
        return await self.get_collection(
            media, page=page, page_size=self.DEFAULT_PAGE_SIZE, filters=CollectionFilters(query=query)
        )

    async def get_related(
        self,
        media: MediaKind | str,
        entity_id: Any,
        relation: Relation | str = Relation.SIMILAR,
        page: int = 1,
    ) -> CollectionPage:
        """
        Elements similaires ou recommandes pour une entite.

        Raises:
            ValidationError: Identifiant, relation ou page invalide
            NotFoundError: Entite inconnue de l'API amont
        """
        media = MediaKind.parse(media)
        entity_id = validate_entity_id(entity_id)
        page = validate_page(page)
        relation = _parse_relation(relation)

        cache_key = build_cache_key(
            media.value, relation.value, id=entity_id, page=page, page_size=self.DEFAULT_PAGE_SIZE
        )
        return await self._cached_page(
            cache_key,
            media,
            page,
            self.DEFAULT_PAGE_SIZE,
            f"{media.value}/{entity_id}/{relation.value}",
            {"page": page},
            None,
        )

    async def _cached_page(
        self,
        cache_key: str,
        media: MediaKind,
        page: int,
        page_size: int,
        endpoint: str,
        params: dict[str, Any],
        fallback_endpoint: Optional[str],
    ) -> CollectionPage:
        cached = await self._collections.get(cache_key)
        if cached is not None:
            # TODO: stocker la pagination avec les elements ; un cache hit sur
            # la derniere page annonce encore has_more=True.
            return CollectionPage(
                items=cached,
                pagination=Pagination(current_page=page, page_size=page_size, has_more=True),
                from_cache=True,
            )

        async def primary() -> CatalogResponse:
            return await self._client.call(endpoint, params)

        if fallback_endpoint is None:
            response = await primary()
        else:

            async def fallback() -> CatalogResponse:
                return await self._client.call(fallback_endpoint, params)

            response = await fetch_with_fallback(primary, fallback)

        upstream = parse_payload(MediaPage, response.data)
        if not upstream.results:
            # Les pages vides ne sont pas mises en cache
            return CollectionPage(
                items=[],
                pagination=Pagination(current_page=page, page_size=page_size, has_more=False),
            )

        items = map_items(upstream.results[:page_size], media, self._references.current)
        await self._collections.set(cache_key, items)
        logger.debug(f"Collection mise en cache: {cache_key} ({len(items)} elements)")

        return CollectionPage(
            items=items,
            pagination=Pagination(
                current_page=page,
                page_size=page_size,
                has_more=page < upstream.total_pages,
                total_pages=upstream.total_pages,
                total_results=upstream.total_results,
            ),
        )

    # --- Fiches -----------------------------------------------------------------

    async def get_entity_details(
        self,
        entity_id: Any,
        depth: EnrichmentDepth | str = EnrichmentDepth.DETAILED,
        media: MediaKind | str = MediaKind.MOVIE,
    ) -> dict[str, Any]:
        """
        Fiche enrichie d'une entite.

        La fiche n'est mise en cache que si toutes les facettes ont abouti :
        une fiche degradee est servie mais pas conservee.

        Raises:
            ValidationError: Identifiant ou niveau invalide
            NotFoundError: Entite inconnue de l'API amont
            UpstreamError: Echec de la recuperation de la fiche de base
        """
        media = MediaKind.parse(media)
        depth = EnrichmentDepth.parse(depth)
        entity_id = validate_entity_id(entity_id)

        cache_key = build_cache_key(media.value, "details", entity_id, depth=depth.value)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"{media.value}/{entity_id}")
        if not isinstance(response.data, dict) or not response.data:
            raise NotFoundError(f"Fiche introuvable: {media.value}/{entity_id}")

        report = await self._composer.compose(response.data, depth, media)
        if report.complete:
            await self._details.set(cache_key, report.record)
        else:
            logger.info(
                f"Fiche {media.value}/{entity_id} servie sans mise en cache",
                failed=list(report.failed_facets),
                degraded=report.degraded,
            )
        return report.record

    # --- Agregat par genre --------------------------------------------------------

    async def get_by_genre(self, media: MediaKind | str = MediaKind.MOVIE) -> list[dict[str, Any]]:
        """
        Elements populaires de chaque genre du type de media.

        Un appel discover par genre, en parallele ; les genres en echec ou
        sans resultat sont ecartes.

        Returns:
            Liste de {"id", "name", "items"} dans l'ordre des ids de genre

        Raises:
            NotFoundError: Si la table de reference ne contient aucun genre
        """
        media = MediaKind.parse(media)
        cache_key = build_cache_key(media.value, "genres")
        cached = await self._genres.get(cache_key)
        if cached is not None:
            return cached

        table = self._references.current
        media_genres = table.genres_for(media.value)
        if not media_genres:
            raise NotFoundError(f"Aucun genre disponible pour '{media.value}'")

        genres = sorted(media_genres.items())
        outcomes = await self._fan_out.run_all(
            [
                SubFetchSpec(key=name, invoke=self._genre_fetcher(media, genre_id, table))
                for genre_id, name in genres
            ]
        )

        result = [
            {"id": genre_id, "name": name, "items": outcome.value}
            for (genre_id, name), outcome in zip(genres, outcomes, strict=True)
            if outcome.ok and outcome.value
        ]
        if result:
            await self._genres.set(cache_key, result)
        return result

    def _genre_fetcher(self, media: MediaKind, genre_id: int, table: ReferenceTable):
        async def invoke() -> list[dict[str, Any]]:
            response = await self._client.call(
                f"discover/{media.value}",
                {"with_genres": genre_id, "sort_by": "popularity.desc", "page": 1},
            )
            upstream = parse_payload(MediaPage, response.data)
            return map_items(upstream.results[: self.GENRE_ITEMS_LIMIT], media, table)

        return invoke


def _parse_relation(value: Relation | str) -> Relation:
    if isinstance(value, Relation):
        return value
    try:
        return Relation(str(value).lower())
    except ValueError:
        raise ValidationError(f"Relation inconnue: {value!r}") from None
