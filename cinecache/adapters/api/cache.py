"""
Cache memoire avec TTL par entree pour les resultats agreges.

Le cache s'appuie sur cachetools.TLRUCache : chaque entree porte sa propre
date d'expiration, verifiee paresseusement a chaque lecture. Un balayage
periodique (tache asyncio) retire les entrees expirees pour borner la
memoire ; la correction des lectures ne depend jamais de ce balayage.

Une instance par domaine logique :
- collections : pages de listes et de recherches
- details : fiches enrichies et lookups par entite
- genres : agregats par genre (fan-out sur toute la taxonomie)

Pas de politique d'eviction par taille, pas de persistance disque.
"""

import asyncio
import contextlib
import math
import time
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TLRUCache
from loguru import logger


@dataclass(frozen=True)
class CacheEntry:
    """
    Valeur stockee avec sa date d'insertion et sa duree de vie.

    Attributes:
        value: Document ou liste JSON-compatible
        stored_at: Instant d'insertion (horloge du cache)
        ttl: Duree de vie en secondes
    """

    value: Any
    stored_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.stored_at + self.ttl

    def is_fresh(self, now: float) -> bool:
        """Visible uniquement tant que now < stored_at + ttl."""
        return now < self.expires_at


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at


def build_cache_key(*parts: Any, **filters: Any) -> str:
    """
    Construit une cle deterministe depuis les parametres logiques d'une requete.

    Les filtres sont tries par nom et les valeurs None ignorees : deux requetes
    logiquement identiques produisent la meme cle quel que soit l'ordre des
    arguments.

    Example:
        build_cache_key("movie", "popular", page=2, page_size=20)
        # -> "movie:popular:page=2:page_size=20"
    """
    segments = [str(part) for part in parts if part is not None]
    for name in sorted(filters):
        value = filters[name]
        if value is None:
            continue
        segments.append(f"{name}={value}")
    return ":".join(segments)


class CacheStore:
    """
    Cache asynchrone en memoire avec TTL par entree.

    Les acces sont serialises par un asyncio.Lock par instance ; les valeurs
    sont copiees en profondeur a l'ecriture et a la lecture pour que les
    appelants ne puissent pas modifier l'etat partage.

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut (1h)
        DEFAULT_SWEEP_INTERVAL: Intervalle du balayage d'expiration (10 min)

    Example:
        store = CacheStore("collections", default_ttl=3600)
        await store.set("movie:popular:page=1", items)
        items = await store.get("movie:popular:page=1")
    """

    DEFAULT_TTL = 60 * 60  # 1 heure
    DEFAULT_SWEEP_INTERVAL = 10 * 60  # 10 minutes

    def __init__(
        self,
        name: str,
        default_ttl: float = DEFAULT_TTL,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise un cache vide.

        Args:
            name: Nom du domaine (logs uniquement)
            default_ttl: TTL applique quand set() n'en precise pas
            sweep_interval: Secondes entre deux balayages periodiques
            timer: Horloge monotone (injectable pour les tests)
        """
        self.name = name
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._timer = timer
        self._entries: TLRUCache = TLRUCache(maxsize=math.inf, ttu=_entry_expiry, timer=timer)
        self._lock: Optional[asyncio.Lock] = None
        self._sweeper: Optional[asyncio.Task] = None

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Args:
            key: Cle construite par build_cache_key

        Returns:
            Une copie de la valeur stockee, ou None si absente ou expiree
        """
        async with self._ensure_lock():
            entry: Optional[CacheEntry] = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._timer()):
            logger.debug("Cache miss", cache=self.name, key=key)
            return None
        logger.debug("Cache hit", cache=self.name, key=key)
        return deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """
        Stocke une valeur avec un TTL (dernier ecrivain gagnant).

        Args:
            key: Cle construite par build_cache_key
            value: Valeur JSON-compatible
            ttl: Duree de vie en secondes (defaut: default_ttl)
        """
        entry = CacheEntry(
            value=deepcopy(value),
            stored_at=self._timer(),
            ttl=self.default_ttl if ttl is None else ttl,
        )
        async with self._ensure_lock():
            self._entries[key] = entry

    async def delete(self, key: str) -> None:
        async with self._ensure_lock():
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        async with self._ensure_lock():
            self._entries.clear()

    async def sweep(self) -> int:
        """
        Retire les entrees expirees.

        Returns:
            Nombre d'entrees retirees
        """
        async with self._ensure_lock():
            removed = len(self._entries.expire())
        if removed:
            logger.debug("Balayage du cache", cache=self.name, removed=removed)
        return removed

    def __len__(self) -> int:
        """Nombre d'entrees en memoire."""
        return len(self._entries)

    def start_sweeper(self) -> None:
        """Lance le balayage periodique dans la boucle courante (idempotent)."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(
                self._sweep_forever(), name=f"cache-sweeper-{self.name}"
            )

    async def stop_sweeper(self) -> None:
        """Arrete le balayage periodique s'il tourne."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper
        self._sweeper = None

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            await self.sweep()

    def _ensure_lock(self) -> asyncio.Lock:
        # Cree a la premiere utilisation, une fois la boucle d'evenements lancee
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock
