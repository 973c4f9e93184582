"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports client API : Contrats pour les services externes
- ICatalogClient : Client de l'API catalogue distante
- CatalogResponse : Reponse decodee d'un appel
"""

from cinecache.core.ports.api_clients import CatalogResponse, ICatalogClient

__all__ = [
    "CatalogResponse",
    "ICatalogClient",
]
