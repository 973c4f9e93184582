"""
Objets valeur du chemin d'enrichissement.

- EnrichmentDepth : niveau d'enrichissement demande par l'appelant
- SubFetchSpec : unite de travail nommee soumise a l'executeur fan-out
- Fulfilled / Rejected : issue etiquetee d'une unite, dans l'ordre de soumission
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from cinecache.core.errors import ValidationError


class EnrichmentDepth(Enum):
    """Niveau d'enrichissement d'une fiche.

    Valeurs:
        BASIC: Uniquement la resolution des noms de genres
        DETAILED: Genres + credits, videos, images et elements lies
    """

    BASIC = "basic"
    DETAILED = "detailed"

    @classmethod
    def parse(cls, value: "EnrichmentDepth | str") -> "EnrichmentDepth":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Niveau d'enrichissement inconnu: {value!r}") from None


@dataclass(frozen=True)
class SubFetchSpec:
    """
    Unite de travail independante et faillible.

    Attributs:
        key: Nom de la facette (utilise pour les logs)
        invoke: Fabrique de coroutine, appelee une seule fois par l'executeur
    """

    key: str
    invoke: Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class Fulfilled:
    """Issue reussie d'une unite."""

    key: str
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Issue en echec d'une unite, l'exception est conservee telle quelle."""

    key: str
    error: BaseException

    @property
    def ok(self) -> bool:
        return False


SubFetchOutcome = Union[Fulfilled, Rejected]
