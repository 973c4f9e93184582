"""
Lookups par entite : personnes, franchises, mots-cles, societes.

Chaque lookup suit le meme flux : validation de l'identifiant, lecture du
cache des fiches, appel amont, projection par la table de reference, mise
en cache.
"""

from typing import Any, Optional

from cinecache.adapters.api.cache import CacheStore, build_cache_key
from cinecache.adapters.api.schemas import (
    CompanyPayload,
    FilmographyPayload,
    FranchisePayload,
    KeywordsPayload,
    PersonPayload,
    parse_payload,
)
from cinecache.core.ports.api_clients import ICatalogClient
from cinecache.core.value_objects.media import MediaKind
from cinecache.core.value_objects.reference_table import ReferenceTableHolder
from cinecache.services.mapping import item_date, map_item
from cinecache.services.parameters import validate_entity_id


class LookupService:
    """
    Lookups simples par identifiant, caches dans le domaine des fiches.

    Example:
        person = await lookups.get_person(287)
        credits = await lookups.get_person_credits(287, "movie")
    """

    def __init__(
        self,
        client: ICatalogClient,
        references: ReferenceTableHolder,
        detail_cache: CacheStore,
    ) -> None:
        self._client = client
        self._references = references
        self._details = detail_cache

    async def get_person(self, person_id: Any) -> dict[str, Any]:
        """Fiche d'une personne avec l'URL de sa photo de profil."""
        person_id = validate_entity_id(person_id, "person")
        cache_key = build_cache_key("person", person_id)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"person/{person_id}")
        person = parse_payload(PersonPayload, response.data)
        document = dict(response.data)
        document["profile_url"] = self._references.current.profile_url(person.profile_path)

        await self._details.set(cache_key, document)
        return document

    async def get_person_credits(
        self,
        person_id: Any,
        media: MediaKind | str = MediaKind.MOVIE,
    ) -> dict[str, list[dict[str, Any]]]:
        """
        Filmographie d'une personne pour un type de media.

        Returns:
            {"cast": [...], "crew": [...]}, chaque liste triee du plus recent
            au plus ancien (elements sans date en fin de liste)
        """
        media = MediaKind.parse(media)
        person_id = validate_entity_id(person_id, "person")
        cache_key = build_cache_key("person", person_id, "credits", media=media.value)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"person/{person_id}/{media.value}_credits")
        filmography = parse_payload(FilmographyPayload, response.data)
        table = self._references.current

        document = {}
        for role, items in (("cast", filmography.cast), ("crew", filmography.crew)):
            dated = sorted(
                (item for item in items if item_date(item, media)),
                key=lambda item: item_date(item, media),
                reverse=True,
            )
            undated = [item for item in items if not item_date(item, media)]
            document[role] = [map_item(item, media, table) for item in dated + undated]

        await self._details.set(cache_key, document)
        return document

    async def get_franchise(self, collection_id: Any) -> dict[str, Any]:
        """Collection de films (franchise), parties triees de la plus ancienne a la plus recente."""
        collection_id = validate_entity_id(collection_id, "collection")
        cache_key = build_cache_key("collection", collection_id)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"collection/{collection_id}")
        franchise = parse_payload(FranchisePayload, response.data)
        table = self._references.current

        parts = sorted(franchise.parts, key=lambda part: _date_sort_key(part.release_date))
        document = dict(response.data)
        document["poster_url"] = table.poster_url(franchise.poster_path)
        document["backdrop_url"] = table.backdrop_url(franchise.backdrop_path)
        document["parts"] = [map_item(part, MediaKind.MOVIE, table) for part in parts]

        await self._details.set(cache_key, document)
        return document

    async def get_keywords(self, media: MediaKind | str, entity_id: Any) -> list[dict[str, Any]]:
        media = MediaKind.parse(media)
        entity_id = validate_entity_id(entity_id)
        cache_key = build_cache_key(media.value, "keywords", entity_id)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"{media.value}/{entity_id}/keywords")
        keywords = parse_payload(KeywordsPayload, response.data)
        document = [{"id": keyword.id, "name": keyword.name} for keyword in keywords.entries]

        await self._details.set(cache_key, document)
        return document

    async def get_company(self, company_id: Any) -> dict[str, Any]:
        """Fiche d'une societe de production avec l'URL de son logo."""
        company_id = validate_entity_id(company_id, "company")
        cache_key = build_cache_key("company", company_id)
        cached = await self._details.get(cache_key)
        if cached is not None:
            return cached

        response = await self._client.call(f"company/{company_id}")
        company = parse_payload(CompanyPayload, response.data)
        document = dict(response.data)
        # Les logos sont des images PNG, servies a la taille des posters
        document["logo_url"] = self._references.current.poster_url(company.logo_path)

        await self._details.set(cache_key, document)
        return document


def _date_sort_key(date: Optional[str]) -> tuple[bool, str]:
    # Sans date en fin de liste
    return (not date, date or "")
