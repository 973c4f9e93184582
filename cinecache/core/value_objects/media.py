"""
Objets valeur pour les requetes de collections du catalogue.

Decrivent le type de media (film ou serie), les listes standard exposees
par l'API amont, les filtres d'une requete de collection et le document de
pagination renvoye a l'appelant.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from cinecache.core.errors import ValidationError


class MediaKind(Enum):
    """Type de media du catalogue.

    Valeurs:
        MOVIE: Film (chemins movie/..., champs title/release_date)
        TV: Serie TV (chemins tv/..., champs name/first_air_date)
    """

    MOVIE = "movie"
    TV = "tv"

    @classmethod
    def parse(cls, value: "MediaKind | str") -> "MediaKind":
        """Convertit une chaine en MediaKind, leve ValidationError si inconnue."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Type de media inconnu: {value!r}") from None

    @property
    def year_param(self) -> str:
        """Parametre de filtre par annee de l'endpoint discover."""
        if self is MediaKind.MOVIE:
            return "primary_release_year"
        return "first_air_date_year"

    @property
    def listings(self) -> tuple["Listing", ...]:
        """Listes standard disponibles pour ce type de media."""
        if self is MediaKind.MOVIE:
            return (Listing.POPULAR, Listing.NOW_PLAYING, Listing.UPCOMING, Listing.TOP_RATED)
        return (Listing.POPULAR, Listing.AIRING_TODAY, Listing.ON_THE_AIR, Listing.TOP_RATED)


class Listing(Enum):
    """Liste standard (endpoint <media>/<listing>) de l'API amont."""

    POPULAR = "popular"
    NOW_PLAYING = "now_playing"
    UPCOMING = "upcoming"
    TOP_RATED = "top_rated"
    AIRING_TODAY = "airing_today"
    ON_THE_AIR = "on_the_air"

    @classmethod
    def parse(cls, value: "Listing | str", media: MediaKind) -> "Listing":
        """Convertit une chaine en Listing valide pour le type de media."""
        if isinstance(value, cls):
            listing = value
        else:
            try:
                listing = cls(str(value).lower().replace("-", "_"))
            except ValueError:
                raise ValidationError(f"Liste inconnue: {value!r}") from None
        if listing not in media.listings:
            raise ValidationError(f"Liste '{listing.value}' indisponible pour '{media.value}'")
        return listing

    @property
    def fallback(self) -> "Listing":
        """Liste interrogee quand l'appel principal echoue."""
        if self is Listing.POPULAR:
            return Listing.TOP_RATED
        return Listing.POPULAR


class Relation(Enum):
    """Listes d'elements lies a une entite."""

    SIMILAR = "similar"
    RECOMMENDATIONS = "recommendations"


@dataclass(frozen=True)
class CollectionFilters:
    """
    Filtres optionnels d'une requete de collection.

    Attributs:
        query: Texte de recherche (route vers search/<media>)
        year: Annee de sortie (route vers discover/<media>)
        genre_id: Genre TMDB (route vers discover/<media>)
    """

    query: Optional[str] = None
    year: Optional[int] = None
    genre_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, values: Optional[dict[str, Any]]) -> "CollectionFilters":
        """Construit les filtres depuis un dict (cles inconnues refusees)."""
        if not values:
            return cls()
        unknown = set(values) - {"query", "year", "genre_id"}
        if unknown:
            raise ValidationError(f"Filtres inconnus: {', '.join(sorted(unknown))}")
        return cls(**values)

    @property
    def is_discover(self) -> bool:
        return self.year is not None or self.genre_id is not None

    def as_key_parts(self) -> dict[str, Any]:
        """Valeurs non nulles, normalisees pour la cle de cache."""
        parts: dict[str, Any] = {}
        if self.query is not None:
            parts["query"] = self.query.strip().casefold()
        if self.year is not None:
            parts["year"] = self.year
        if self.genre_id is not None:
            parts["genre"] = self.genre_id
        return parts


@dataclass(frozen=True)
class Pagination:
    """Metadonnees de pagination d'une page de collection."""

    current_page: int
    has_more: bool
    page_size: Optional[int] = None
    total_pages: Optional[int] = None
    total_results: Optional[int] = None

    def as_dict(self) -> dict[str, Any]:
        """Document de pagination, sans les champs absents."""
        document: dict[str, Any] = {"current_page": self.current_page}
        if self.page_size is not None:
            document["page_size"] = self.page_size
        document["has_more"] = self.has_more
        if self.total_pages is not None:
            document["total_pages"] = self.total_pages
        if self.total_results is not None:
            document["total_results"] = self.total_results
        return document


@dataclass(frozen=True)
class CollectionPage:
    """Page de collection : elements mappes et pagination."""

    items: list[dict[str, Any]] = field(default_factory=list)
    pagination: Pagination = field(default_factory=lambda: Pagination(current_page=1, has_more=False))
    from_cache: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {"items": self.items, "pagination": self.pagination.as_dict()}
