"""
Interface port pour le client de l'API catalogue distante.

Le moteur ne connait que ce contrat : un appel nomme (endpoint + parametres)
qui retourne les donnees decodees ou leve une erreur de la taxonomie
cinecache.core.errors. Le transport HTTP reel est fourni par un adaptateur.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CatalogResponse:
    """
    Reponse decodee de l'API amont.

    Attributs :
        data : Corps JSON decode
        status : Code HTTP de la reponse
    """

    data: Any
    status: int = 200


class ICatalogClient(ABC):
    """
    Interface du client de l'API catalogue.

    Les implementations levent :
    - UpstreamRateLimited sur 429
    - NotFoundError sur 404
    - UpstreamError pour tout autre echec (statut, transport, JSON invalide)
    """

    @abstractmethod
    async def call(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> CatalogResponse:
        """
        Execute un appel GET sur l'API amont.

        Args :
            endpoint : Chemin relatif (ex: "movie/popular")
            params : Parametres de requete optionnels

        Retourne :
            CatalogResponse avec le corps decode
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...

    async def close(self) -> None:
        """Libere les ressources du client (connexions HTTP)."""
