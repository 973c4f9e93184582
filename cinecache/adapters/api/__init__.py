"""
Adaptateurs de l'API catalogue et infrastructure partagee.

Ce module fournit:
- TMDBCatalogClient: transport HTTP vers TMDB (implemente ICatalogClient)
- CacheStore: cache memoire avec TTL par entree et balayage periodique
- build_cache_key: cles deterministes depuis les parametres logiques
- fetch_with_fallback: strategie primaire/secours a un seul saut
- schemas: modeles pydantic des payloads bruts
"""

from cinecache.adapters.api.cache import CacheEntry, CacheStore, build_cache_key
from cinecache.adapters.api.fallback import fetch_with_fallback, is_fallback_eligible
from cinecache.adapters.api.tmdb_client import TMDBCatalogClient

__all__ = [
    "CacheEntry",
    "CacheStore",
    "TMDBCatalogClient",
    "build_cache_key",
    "fetch_with_fallback",
    "is_fallback_eligible",
]
