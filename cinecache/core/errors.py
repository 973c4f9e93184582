"""
Taxonomie des erreurs du moteur d'agregation.

Chaque erreur porte un genre (kind) stable utilise par la couche HTTP pour
choisir le code de reponse. Le moteur lui-meme ne manipule jamais de codes
HTTP en sortie, seulement ces types.

Hierarchie :
- CatalogError : racine
- ValidationError : parametre invalide (faute de l'appelant, pas de cache, pas de retry)
- NotFoundError : l'API amont confirme l'absence
- UpstreamError : tout autre echec distant (eligible au fallback)
- UpstreamRateLimited : 429, jamais suivi d'un fallback
- SubFetchFailure : echec confine a une facette d'enrichissement
"""

from typing import Any, Optional


class CatalogError(Exception):
    """Erreur de base du catalogue."""

    kind: str = "catalog_error"


class ValidationError(CatalogError):
    """Identifiant mal forme ou parametre hors bornes."""

    kind = "validation_error"


class NotFoundError(CatalogError):
    """L'API amont a confirme que la ressource n'existe pas."""

    kind = "not_found"

    def __init__(self, message: str = "Ressource introuvable", endpoint: Optional[str] = None) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class UpstreamError(CatalogError):
    """
    Echec d'un appel a l'API amont.

    Attributes:
        status: Code HTTP de la reponse, ou None pour une erreur de transport
        body: Corps de la reponse (texte ou JSON decode) si disponible
    """

    kind = "upstream_error"

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None,
    ) -> None:
        self.status = status
        self.body = body
        super().__init__(message)


class UpstreamRateLimited(UpstreamError):
    """
    L'API amont a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    kind = "rate_limited"

    def __init__(self, retry_after: Optional[int] = None, body: Any = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s", status=429, body=body)


class SubFetchFailure(CatalogError):
    """Echec d'une facette d'enrichissement, jamais propage au-dela du composeur."""

    kind = "sub_fetch_failure"

    def __init__(self, facet: str, cause: BaseException) -> None:
        self.facet = facet
        self.cause = cause
        super().__init__(f"Facette '{facet}' en echec: {cause}")
