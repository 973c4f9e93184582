"""
Chargement de la table de reference depuis l'API TMDB.

Les cinq taxonomies (configuration d'images, genres films, genres series,
langues, pays) sont recuperees en parallele. Toute sous-requete en echec fait
echouer le chargement entier : une table partielle n'est jamais publiee.
"""

from typing import Any

from loguru import logger

from cinecache.adapters.api.schemas import (
    ConfigurationPayload,
    CountryEntry,
    GenreList,
    LanguageEntry,
    parse_payload,
    parse_payload_list,
)
from cinecache.core.errors import CatalogError
from cinecache.core.ports.api_clients import ICatalogClient
from cinecache.core.value_objects.enrichment import SubFetchSpec
from cinecache.core.value_objects.reference_table import ReferenceTable, ReferenceTableHolder
from cinecache.services.fan_out import FanOutExecutor


class ReferenceTableLoader:
    """
    Construit une ReferenceTable complete depuis l'API amont.

    Example:
        loader = ReferenceTableLoader(client, FanOutExecutor())
        if not await loader.initialize(holder):
            logger.warning("Taxonomies indisponibles")
    """

    ENDPOINTS = (
        ("configuration", "configuration"),
        ("movie_genres", "genre/movie/list"),
        ("tv_genres", "genre/tv/list"),
        ("languages", "configuration/languages"),
        ("countries", "configuration/countries"),
    )

    def __init__(
        self,
        client: ICatalogClient,
        fan_out: FanOutExecutor,
        poster_size: str = "w500",
        backdrop_size: str = "w1280",
        profile_size: str = "w185",
    ) -> None:
        self._client = client
        self._fan_out = fan_out
        self._poster_size = poster_size
        self._backdrop_size = backdrop_size
        self._profile_size = profile_size

    async def load(self) -> ReferenceTable:
        """
        Recupere les taxonomies et construit la table.

        Returns:
            Une ReferenceTable peuplee

        Raises:
            CatalogError: Premiere erreur rencontree si une taxonomie manque
        """
        outcomes = await self._fan_out.run_all(
            [SubFetchSpec(key=key, invoke=self._caller(endpoint)) for key, endpoint in self.ENDPOINTS]
        )
        for outcome in outcomes:
            if not outcome.ok:
                raise outcome.error
        payloads = {outcome.key: outcome.value for outcome in outcomes}

        configuration = parse_payload(ConfigurationPayload, payloads["configuration"])
        genres = {
            key: {genre.id: genre.name for genre in parse_payload(GenreList, payloads[key]).genres}
            for key in ("movie_genres", "tv_genres")
        }

        images = configuration.images
        return ReferenceTable(
            movie_genres=genres["movie_genres"],
            tv_genres=genres["tv_genres"],
            languages={
                entry.iso_639_1: entry.english_name
                for entry in parse_payload_list(LanguageEntry, payloads["languages"])
            },
            countries={
                entry.iso_3166_1: entry.english_name
                for entry in parse_payload_list(CountryEntry, payloads["countries"])
            },
            image_base_url=images.secure_base_url or images.base_url,
            poster_size=self._poster_size,
            backdrop_size=self._backdrop_size,
            profile_size=self._profile_size,
            configuration=configuration.model_dump(),
        )

    async def initialize(self, holder: ReferenceTableHolder) -> bool:
        """
        Charge la table et la publie dans le holder (remplacement atomique).

        Returns:
            True si la table a ete publiee, False si le chargement a echoue
            (la table precedente reste en place)
        """
        logger.info("Initialisation des taxonomies TMDB...")
        try:
            table = await self.load()
        except CatalogError as e:
            logger.error(f"Erreur lors de l'initialisation des taxonomies TMDB: {e}")
            return False

        holder.replace(table)
        logger.info(
            "Taxonomies TMDB initialisees",
            genres=len(table.genres),
            languages=len(table.languages),
            countries=len(table.countries),
        )
        return True

    def _caller(self, endpoint: str):
        async def invoke() -> Any:
            response = await self._client.call(endpoint)
            return response.data

        return invoke
