"""
Doublures de test partagees : horloge factice, reponses differees et client route.
"""

from copy import deepcopy
from typing import Any, Optional
from unittest.mock import AsyncMock

from cinecache.core.errors import NotFoundError
from cinecache.core.ports.api_clients import CatalogResponse, ICatalogClient


class FakeClock:
    """Horloge monotone pilotee a la main."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Delayed:
    """Reponse de route servie apres un delai (simulation de latence)."""

    def __init__(self, seconds: float, payload: Any) -> None:
        self.seconds = seconds
        self.payload = payload


def endpoints_called(client: AsyncMock) -> list[str]:
    """Endpoints appeles sur un client factice, dans l'ordre."""
    return [call.args[0] for call in client.call.await_args_list]


class RoutedCatalogClient(ICatalogClient):
    """
    Client catalogue factice pour les tests d'integration web.

    Route par endpoint : payload renvoye tel quel ou exception levee ;
    un endpoint inconnu leve NotFoundError.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, Optional[dict[str, Any]]]] = []
        self.closed = False

    @property
    def source(self) -> str:
        return "stub"

    async def call(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> CatalogResponse:
        self.calls.append((endpoint, params))
        outcome = self.routes.get(endpoint)
        if outcome is None:
            raise NotFoundError(f"Ressource introuvable: /{endpoint}", endpoint=endpoint)
        if isinstance(outcome, BaseException):
            raise outcome
        return CatalogResponse(data=deepcopy(outcome))

    async def close(self) -> None:
        self.closed = True
