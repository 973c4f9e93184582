"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Tous les composants sont des Singletons : les caches et la table de reference
sont partages par toutes les requetes d'un meme processus.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import CacheStore
from .adapters.api.tmdb_client import TMDBCatalogClient
from .config import Settings
from .core.value_objects.reference_table import ReferenceTableHolder
from .services.catalog import CatalogService
from .services.enricher import EnrichmentComposer
from .services.fan_out import FanOutExecutor
from .services.lookups import LookupService
from .services.reference_table import ReferenceTableLoader


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        catalog = container.catalog_service()
        page = await catalog.get_collection("movie")

    Pour les tests, surcharger le client :
        container.tmdb_client.override(providers.Object(fake_client))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Table de reference - remplacee en bloc par le loader
    references = providers.Singleton(ReferenceTableHolder)

    fan_out = providers.Singleton(
        FanOutExecutor,
        max_concurrency=config.provided.fan_out_max_concurrency,
    )

    # Client API - Singleton pour partager la connexion HTTP
    tmdb_client = providers.Singleton(
        TMDBCatalogClient,
        api_key=config.provided.tmdb_api_token,
        base_url=config.provided.tmdb_base_url,
        language=config.provided.tmdb_language,
        timeout=config.provided.request_timeout,
    )

    # Un cache par domaine, TTL independants
    collection_cache = providers.Singleton(
        CacheStore,
        name="collections",
        default_ttl=config.provided.collection_cache_ttl,
        sweep_interval=config.provided.cache_sweep_interval,
    )
    detail_cache = providers.Singleton(
        CacheStore,
        name="details",
        default_ttl=config.provided.detail_cache_ttl,
        sweep_interval=config.provided.cache_sweep_interval,
    )
    genre_cache = providers.Singleton(
        CacheStore,
        name="genres",
        default_ttl=config.provided.genre_cache_ttl,
        sweep_interval=config.provided.cache_sweep_interval,
    )

    reference_loader = providers.Singleton(
        ReferenceTableLoader,
        client=tmdb_client,
        fan_out=fan_out,
        poster_size=config.provided.poster_size,
        backdrop_size=config.provided.backdrop_size,
        profile_size=config.provided.profile_size,
    )

    enrichment_composer = providers.Singleton(
        EnrichmentComposer,
        client=tmdb_client,
        references=references,
        fan_out=fan_out,
    )

    catalog_service = providers.Singleton(
        CatalogService,
        client=tmdb_client,
        references=references,
        composer=enrichment_composer,
        fan_out=fan_out,
        collection_cache=collection_cache,
        detail_cache=detail_cache,
        genre_cache=genre_cache,
    )

    lookup_service = providers.Singleton(
        LookupService,
        client=tmdb_client,
        references=references,
        detail_cache=detail_cache,
    )


def domain_caches(container: Container) -> list[CacheStore]:
    """Les trois caches de domaine, dans un ordre stable."""
    return [container.collection_cache(), container.detail_cache(), container.genre_cache()]
