"""
Composeur d'enrichissement des fiches du catalogue.

EnrichmentComposer assemble une fiche de base et N sous-documents
optionnels (genres, credits, videos, images, elements lies) en un seul
document de sortie, selon le niveau d'enrichissement demande.

Responsabilites:
- Planifier les sous-requetes selon le niveau (BASIC / DETAILED) et la
  presence d'un identifiant sur la fiche
- Les executer via le FanOutExecutor (echecs independants)
- Rattacher chaque issue a sa facette par position, jamais par contenu
- Placer chaque champ de facon deterministe, avec une valeur par defaut
  pour toute facette en echec
- Rendre la fiche non enrichie si le composeur lui-meme echoue
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from cinecache.adapters.api.schemas import (
    CreditsPayload,
    ImagesPayload,
    MediaDetailsPayload,
    MediaPage,
    VideosPayload,
    parse_payload,
)
from cinecache.core.errors import SubFetchFailure
from cinecache.core.ports.api_clients import ICatalogClient
from cinecache.core.value_objects.enrichment import EnrichmentDepth, SubFetchSpec
from cinecache.core.value_objects.media import MediaKind
from cinecache.core.value_objects.reference_table import ReferenceTable, ReferenceTableHolder
from cinecache.services.fan_out import FanOutExecutor
from cinecache.services.mapping import thin_item


@dataclass
class EnrichmentReport:
    """Resultat d'une composition.

    Attributes:
        record: Document enrichi (ou la fiche de base si degraded)
        failed_facets: Champs remplis par leur valeur par defaut suite a un echec
        degraded: True si le composeur a echoue et rendu la fiche telle quelle
    """

    record: Any
    failed_facets: tuple[str, ...] = ()
    degraded: bool = False

    @property
    def complete(self) -> bool:
        """Vrai si toutes les facettes ont abouti."""
        return not self.degraded and not self.failed_facets


@dataclass(frozen=True)
class _Facet:
    """Facette planifiee : champ de sortie, sous-requete et valeur par defaut."""

    name: str
    fetch: Callable[[], Awaitable[Any]]
    default: Callable[[], Any] = field(default=lambda: None)


class EnrichmentComposer:
    """
    Compose une fiche enrichie a partir d'une fiche de base.

    Attributes:
        CAST_LIMIT: Nombre d'acteurs conserves dans les credits
        CREW_JOBS: Postes d'equipe conserves
        IMAGES_LIMIT: Nombre de backdrops et de posters conserves
        RELATED_LIMIT: Nombre d'elements lies conserves
        VIDEO_SITE: Plateforme des videos integrables

    Example:
        composer = EnrichmentComposer(client, references, FanOutExecutor())
        movie = await composer.enrich(base_record, EnrichmentDepth.DETAILED)
        print(movie["genres"], len(movie["related_items"]))
    """

    CAST_LIMIT = 10
    CREW_JOBS = ("Director", "Producer", "Executive Producer", "Screenplay", "Writer")
    IMAGES_LIMIT = 5
    RELATED_LIMIT = 6
    VIDEO_SITE = "YouTube"
    VIDEO_EMBED_URL = "https://youtube.com/embed/{key}"

    def __init__(
        self,
        client: ICatalogClient,
        references: ReferenceTableHolder,
        fan_out: FanOutExecutor,
    ) -> None:
        """
        Initialise le composeur.

        Args:
            client: Client de l'API catalogue
            references: Acces a la table de reference courante
            fan_out: Executeur des sous-requetes
        """
        self._client = client
        self._references = references
        self._fan_out = fan_out

    async def enrich(
        self,
        base_record: dict[str, Any],
        depth: EnrichmentDepth | str = EnrichmentDepth.BASIC,
        media: MediaKind | str = MediaKind.MOVIE,
    ) -> dict[str, Any]:
        """
        Enrichit une fiche, sans jamais lever.

        Args:
            base_record: Fiche brute de l'API (liste ou details)
            depth: Niveau d'enrichissement
            media: Type de media de la fiche

        Returns:
            La fiche enrichie, ou la fiche de base si le composeur echoue
        """
        report = await self.compose(base_record, depth, media)
        return report.record

    async def compose(
        self,
        base_record: dict[str, Any],
        depth: EnrichmentDepth | str = EnrichmentDepth.BASIC,
        media: MediaKind | str = MediaKind.MOVIE,
    ) -> EnrichmentReport:
        """Comme enrich(), mais indique aussi les facettes en echec."""
        try:
            return await self._compose(base_record, EnrichmentDepth.parse(depth), MediaKind.parse(media))
        except Exception as error:
            logger.error(f"Erreur lors de l'enrichissement de la fiche: {error}")
            return EnrichmentReport(record=base_record, degraded=True)

    async def _compose(
        self,
        base_record: dict[str, Any],
        depth: EnrichmentDepth,
        media: MediaKind,
    ) -> EnrichmentReport:
        # Un seul instantane de la table pour toute la composition
        table = self._references.current
        base = parse_payload(MediaDetailsPayload, base_record)

        record = dict(base_record)
        record["poster_url"] = table.poster_url(base.poster_path)
        record["backdrop_url"] = table.backdrop_url(base.backdrop_path)

        facets = self._plan(base, depth, media, table)
        if base.id is None:
            for facet in facets:
                record[facet.name] = facet.default()
            return EnrichmentReport(record=record)

        outcomes = await self._fan_out.run_all(
            [SubFetchSpec(key=facet.name, invoke=facet.fetch) for facet in facets]
        )

        failed: list[str] = []
        for facet, outcome in zip(facets, outcomes, strict=True):
            if outcome.ok:
                record[facet.name] = outcome.value
            else:
                failure = SubFetchFailure(facet.name, outcome.error)
                logger.warning(f"Enrichissement partiel de {media.value}/{base.id}: {failure}")
                record[facet.name] = facet.default()
                failed.append(facet.name)

        return EnrichmentReport(record=record, failed_facets=tuple(failed))

    def _plan(
        self,
        base: MediaDetailsPayload,
        depth: EnrichmentDepth,
        media: MediaKind,
        table: ReferenceTable,
    ) -> list[_Facet]:
        """Facettes a produire, dans l'ordre de placement des champs."""
        entity_id = base.id
        facets = [
            _Facet(
                name="genres",
                fetch=lambda: self._fetch_genres(media, entity_id),
                # Sans la fiche complete : noms deja presents, sinon la table locale
                default=lambda: [genre.name for genre in base.genres] or table.genre_names(base.genre_ids),
            )
        ]
        if depth is EnrichmentDepth.DETAILED:
            facets.extend(
                [
                    _Facet("credits", lambda: self._fetch_credits(media, entity_id, table)),
                    _Facet("videos", lambda: self._fetch_videos(media, entity_id), default=list),
                    _Facet("images", lambda: self._fetch_images(media, entity_id, table)),
                    _Facet("related_items", lambda: self._fetch_related(media, entity_id, table), default=list),
                ]
            )
        return facets

    # --- Sous-requetes --------------------------------------------------------

    async def _fetch_genres(self, media: MediaKind, entity_id: Optional[int]) -> list[str]:
        # Les elements de liste n'ont que genre_ids : la fiche complete porte les noms
        response = await self._client.call(f"{media.value}/{entity_id}")
        details = parse_payload(MediaDetailsPayload, response.data)
        return [genre.name for genre in details.genres]

    async def _fetch_credits(
        self, media: MediaKind, entity_id: Optional[int], table: ReferenceTable
    ) -> dict[str, list[dict[str, Any]]]:
        response = await self._client.call(f"{media.value}/{entity_id}/credits")
        credits = parse_payload(CreditsPayload, response.data)
        return {
            "cast": [
                {
                    "id": person.id,
                    "name": person.name,
                    "character": person.character,
                    "profile_url": table.profile_url(person.profile_path),
                }
                for person in credits.cast[: self.CAST_LIMIT]
            ],
            "crew": [
                {
                    "id": person.id,
                    "name": person.name,
                    "job": person.job,
                    "profile_url": table.profile_url(person.profile_path),
                }
                for person in credits.crew
                if person.job in self.CREW_JOBS
            ],
        }

    async def _fetch_videos(self, media: MediaKind, entity_id: Optional[int]) -> list[dict[str, Any]]:
        response = await self._client.call(f"{media.value}/{entity_id}/videos")
        videos = parse_payload(VideosPayload, response.data)
        return [
            {
                "key": video.key,
                "name": video.name,
                "type": video.type,
                "url": self.VIDEO_EMBED_URL.format(key=video.key),
            }
            for video in videos.results
            if video.site == self.VIDEO_SITE and video.key
        ]

    async def _fetch_images(
        self, media: MediaKind, entity_id: Optional[int], table: ReferenceTable
    ) -> dict[str, list[dict[str, Any]]]:
        response = await self._client.call(f"{media.value}/{entity_id}/images")
        images = parse_payload(ImagesPayload, response.data)
        # Ordre de la source, sans re-tri
        return {
            "backdrops": [
                {"file_path": image.file_path, "url": table.backdrop_url(image.file_path)}
                for image in images.backdrops[: self.IMAGES_LIMIT]
            ],
            "posters": [
                {"file_path": image.file_path, "url": table.poster_url(image.file_path)}
                for image in images.posters[: self.IMAGES_LIMIT]
            ],
        }

    async def _fetch_related(
        self, media: MediaKind, entity_id: Optional[int], table: ReferenceTable
    ) -> list[dict[str, Any]]:
        response = await self._client.call(f"{media.value}/{entity_id}/similar", {"page": 1})
        page = parse_payload(MediaPage, response.data)
        return [thin_item(item, media, table) for item in page.results[: self.RELATED_LIMIT]]
