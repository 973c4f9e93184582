"""
Client TMDB : transport HTTP brut vers l'API catalogue.

Implemente l'interface ICatalogClient pour TMDB (The Movie Database).
Le client ne fait ni cache ni retry : il execute un GET, decode le JSON et
traduit les echecs dans la taxonomie d'erreurs du catalogue.

Traduction des statuts:
- 429 -> UpstreamRateLimited (Retry-After conserve)
- 404 -> NotFoundError
- autres 4xx/5xx -> UpstreamError(status, body)
- erreur de transport ou JSON invalide -> UpstreamError(status=None)

Usage:
    client = TMDBCatalogClient(api_key="your_key")
    response = await client.call("movie/popular", {"page": 2})
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cinecache.core.errors import NotFoundError, UpstreamError, UpstreamRateLimited
from cinecache.core.ports.api_clients import CatalogResponse, ICatalogClient


class TMDBCatalogClient(ICatalogClient):
    """
    Client API TMDB pour les appels du catalogue.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBCatalogClient(api_key="xxx", language="fr-FR")
        response = await client.call("movie/27205/credits")
        print(response.data["cast"][0]["name"])
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        language: str = "en-US",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4
            base_url: URL de base de l'API
            language: Parametre language ajoute a chaque appel
            timeout: Timeout des requetes en secondes
            transport: Transport httpx alternatif (tests)
        """
        self._api_key = api_key or ""
        self._base_url = base_url.rstrip("/")
        self._language = language
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Client httpx partage, recree apres close().

        Authentification : un jeton v4 (JWT, plus de 40 caracteres) part en
        header Bearer, une cle v3 en parametre api_key sur chaque requete.
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            elif self._api_key:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def call(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> CatalogResponse:
        """
        Execute un GET sur l'endpoint et retourne le corps decode.

        Args:
            endpoint: Chemin relatif (ex: "movie/popular", "genre/tv/list")
            params: Parametres de requete (language ajoute si absent)

        Returns:
            CatalogResponse avec le JSON decode et le statut

        Raises:
            UpstreamRateLimited: Sur 429
            NotFoundError: Sur 404
            UpstreamError: Sur tout autre echec
        """
        query = {"language": self._language}
        query.update({k: v for k, v in (params or {}).items() if v is not None})
        path = "/" + endpoint.lstrip("/")

        logger.debug(f"Appel TMDB: {path}", params=query)
        try:
            response = await self._get_client().get(path, params=query)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Erreur de transport vers {path}: {e}") from e

        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = int(retry_after_header) if retry_after_header and retry_after_header.isdigit() else None
            raise UpstreamRateLimited(retry_after, body=_safe_body(response))
        if response.status_code == 404:
            raise NotFoundError(f"Ressource introuvable: {path}", endpoint=endpoint)
        if response.is_error:
            raise UpstreamError(
                f"Erreur HTTP {response.status_code} sur {path}",
                status=response.status_code,
                body=_safe_body(response),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"JSON invalide sur {path}",
                status=response.status_code,
                body=response.text,
            ) from e
        return CatalogResponse(data=data, status=response.status_code)

    async def close(self) -> None:
        """Ferme les connexions ouvertes ; un appel ulterieur rouvre un client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


def _safe_body(response: httpx.Response) -> Any:
    """Corps d'erreur decode si possible, texte brut sinon."""
    try:
        return response.json()
    except ValueError:
        return response.text
