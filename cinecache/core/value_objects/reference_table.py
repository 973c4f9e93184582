"""
Table de reference (taxonomies TMDB) et son point d'acces partage.

La table est peuplee une seule fois au demarrage puis traitee comme
immuable : les mappings sont exposes en lecture seule. Une reinitialisation
remplace l'objet entier via ReferenceTableHolder.replace(), jamais champ par
champ, pour qu'aucun lecteur n'observe une table a moitie mise a jour.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional


def _frozen(mapping: Optional[Mapping[Any, str]]) -> Mapping[Any, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ReferenceTable:
    """
    Taxonomies et configuration d'images de l'API amont.

    Attributs:
        movie_genres: id de genre -> nom, genres des films
        tv_genres: id de genre -> nom, genres des series
        genres: Fusion des deux (calculee), sert a nommer les genre_ids
        languages: code ISO 639-1 -> nom anglais
        countries: code ISO 3166-1 -> nom anglais
        image_base_url: Base securisee des images (ex: https://image.tmdb.org/t/p/)
        poster_size: Segment de taille des posters
        backdrop_size: Segment de taille des backdrops
        profile_size: Segment de taille des photos de profil
        configuration: Document de configuration brut (expose par la route taxonomie)
    """

    movie_genres: Mapping[int, str] = field(default_factory=dict)
    tv_genres: Mapping[int, str] = field(default_factory=dict)
    languages: Mapping[str, str] = field(default_factory=dict)
    countries: Mapping[str, str] = field(default_factory=dict)
    image_base_url: Optional[str] = None
    poster_size: str = "w500"
    backdrop_size: str = "w1280"
    profile_size: str = "w185"
    configuration: Mapping[str, Any] = field(default_factory=dict)
    genres: Mapping[int, str] = field(init=False)

    def __post_init__(self) -> None:
        merged = dict(self.movie_genres or {})
        for genre_id, name in (self.tv_genres or {}).items():
            merged.setdefault(genre_id, name)
        object.__setattr__(self, "movie_genres", _frozen(self.movie_genres))
        object.__setattr__(self, "tv_genres", _frozen(self.tv_genres))
        object.__setattr__(self, "genres", _frozen(merged))
        object.__setattr__(self, "languages", _frozen(self.languages))
        object.__setattr__(self, "countries", _frozen(self.countries))
        object.__setattr__(self, "configuration", MappingProxyType(dict(self.configuration or {})))

    @classmethod
    def empty(cls) -> "ReferenceTable":
        """Table non peuplee : tous les constructeurs d'URL retournent None."""
        return cls()

    @property
    def is_populated(self) -> bool:
        return self.image_base_url is not None

    def genre_name(self, genre_id: int) -> str:
        """Nom du genre, ou un libelle generique pour un id inconnu."""
        return self.genres.get(genre_id, f"Genre {genre_id}")

    def genre_names(self, genre_ids: Iterable[int]) -> list[str]:
        return [self.genre_name(genre_id) for genre_id in genre_ids]

    def genres_for(self, media: str) -> Mapping[int, str]:
        """Genres propres a un type de media ('movie' ou 'tv')."""
        if media == "movie":
            return self.movie_genres
        if media == "tv":
            return self.tv_genres
        return MappingProxyType({})

    def language_name(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return None
        return self.languages.get(code)

    def country_name(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return None
        return self.countries.get(code)

    def image_url(self, path: Optional[str], size: str) -> Optional[str]:
        """URL absolue d'une image, None si le chemin ou la table manque."""
        if not path or not self.is_populated:
            return None
        return f"{self.image_base_url}{size}{path}"

    def poster_url(self, path: Optional[str]) -> Optional[str]:
        return self.image_url(path, self.poster_size)

    def backdrop_url(self, path: Optional[str]) -> Optional[str]:
        return self.image_url(path, self.backdrop_size)

    def profile_url(self, path: Optional[str]) -> Optional[str]:
        return self.image_url(path, self.profile_size)

    def as_dict(self) -> dict[str, Any]:
        """Copie JSON-compatible des taxonomies."""
        return {
            "genres": {str(k): v for k, v in self.genres.items()},
            "languages": dict(self.languages),
            "countries": dict(self.countries),
            "configuration": dict(self.configuration),
        }


class ReferenceTableHolder:
    """
    Point d'acces unique a la table de reference courante.

    Les lecteurs prennent `current` une fois puis travaillent sur cet objet
    immuable ; `replace` echange la reference en une seule affectation.
    """

    def __init__(self, table: Optional[ReferenceTable] = None) -> None:
        self._table = table or ReferenceTable.empty()

    @property
    def current(self) -> ReferenceTable:
        return self._table

    def replace(self, table: ReferenceTable) -> None:
        self._table = table
