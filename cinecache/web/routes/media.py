"""
Routes JSON des films (/movies) et des series (/series).

Les deux routeurs sont produits par la meme fabrique : seuls le type de
media et les listes standard different. Les identifiants de chemin sont
recus en texte et valides par les services (400 si mal formes).

Ordre d'enregistrement : les chemins fixes avant /{entity_id}, sinon
"/genres" serait capture comme un identifiant.
"""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends

from ...core.value_objects.media import Listing, MediaKind, Relation
from ...services.catalog import CatalogService
from ...services.lookups import LookupService
from ..deps import get_catalog, get_lookups

CatalogDep = Annotated[CatalogService, Depends(get_catalog)]
LookupDep = Annotated[LookupService, Depends(get_lookups)]


def listing_path(listing: Listing) -> str:
    """Chemin d'une liste standard (now_playing -> /now-playing)."""
    return "/" + listing.value.replace("_", "-")


def build_media_router(media: MediaKind) -> APIRouter:
    """
    Construit le routeur d'un type de media.

    Args:
        media: MediaKind.MOVIE pour /movies, MediaKind.TV pour /series
    """
    router = APIRouter()

    @router.get("/")
    async def collection(
        catalog: CatalogDep,
        page: int = 1,
        page_size: int = CatalogService.DEFAULT_PAGE_SIZE,
        query: Optional[str] = None,
        year: Optional[int] = None,
        genre_id: Optional[int] = None,
    ) -> dict[str, Any]:
        """Liste populaire, ou recherche / discover selon les filtres fournis."""
        filters = {
            name: value
            for name, value in (("query", query), ("year", year), ("genre_id", genre_id))
            if value is not None
        }
        result = await catalog.get_collection(media, page=page, page_size=page_size, filters=filters)
        return result.as_dict()

    for listing in media.listings:
        _add_listing_route(router, media, listing)

    @router.get("/genres")
    async def by_genre(catalog: CatalogDep) -> list[dict[str, Any]]:
        return await catalog.get_by_genre(media)

    @router.get("/year/{year}")
    async def by_year(catalog: CatalogDep, year: str, page: int = 1) -> dict[str, Any]:
        result = await catalog.get_collection(media, page=page, filters={"year": year})
        return result.as_dict()

    @router.get("/search/{query}")
    async def search(catalog: CatalogDep, query: str, page: int = 1) -> dict[str, Any]:
        result = await catalog.search_collection(media, query, page=page)
        return result.as_dict()

    @router.get("/person/{person_id}")
    async def person(lookups: LookupDep, person_id: str) -> dict[str, Any]:
        return await lookups.get_person(person_id)

    @router.get("/person/{person_id}/credits")
    async def person_credits(lookups: LookupDep, person_id: str) -> dict[str, Any]:
        return await lookups.get_person_credits(person_id, media)

    if media is MediaKind.MOVIE:

        @router.get("/collection/{collection_id}")
        async def franchise(lookups: LookupDep, collection_id: str) -> dict[str, Any]:
            return await lookups.get_franchise(collection_id)

    @router.get("/company/{company_id}")
    async def company(lookups: LookupDep, company_id: str) -> dict[str, Any]:
        return await lookups.get_company(company_id)

    for relation in Relation:
        _add_related_route(router, media, relation)

    @router.get("/{entity_id}/keywords")
    async def keywords(lookups: LookupDep, entity_id: str) -> list[dict[str, Any]]:
        return await lookups.get_keywords(media, entity_id)

    @router.get("/{entity_id}")
    async def details(catalog: CatalogDep, entity_id: str, depth: str = "detailed") -> dict[str, Any]:
        """Fiche enrichie (depth=basic : genres seulement)."""
        return await catalog.get_entity_details(entity_id, depth, media)

    return router


def _add_listing_route(router: APIRouter, media: MediaKind, listing: Listing) -> None:
    async def listing_page(
        catalog: CatalogDep,
        page: int = 1,
        page_size: int = CatalogService.DEFAULT_PAGE_SIZE,
    ) -> dict[str, Any]:
        result = await catalog.get_collection(media, page=page, page_size=page_size, listing=listing)
        return result.as_dict()

    router.add_api_route(
        listing_path(listing),
        listing_page,
        methods=["GET"],
        name=f"{media.value}_{listing.value}",
    )


def _add_related_route(router: APIRouter, media: MediaKind, relation: Relation) -> None:
    async def related_page(catalog: CatalogDep, entity_id: str, page: int = 1) -> dict[str, Any]:
        result = await catalog.get_related(media, entity_id, relation, page=page)
        return result.as_dict()

    router.add_api_route(
        f"/{{entity_id}}/{relation.value}",
        related_page,
        methods=["GET"],
        name=f"{media.value}_{relation.value}",
    )


movies_router = build_media_router(MediaKind.MOVIE)
series_router = build_media_router(MediaKind.TV)
