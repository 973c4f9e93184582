"""
Schemas des reponses brutes de l'API TMDB.

Chaque forme de payload est declaree avec ses champs optionnels explicites
et leurs valeurs par defaut ([] ou None). La validation et le defaulting
ont lieu ici, a la frontiere ou la reponse est decodee, et nulle part
ailleurs : les services travaillent sur des modeles deja normalises.

Les modeles d'elements (films, series, personnes) conservent les champs
supplementaires de l'API pour que la sortie reste un sur-ensemble du
document amont.
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as SchemaValidationError

from cinecache.core.errors import UpstreamError


class _Payload(BaseModel):
    """Base des payloads : champs inconnus ignores, listes nulles vides."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_list_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and cls.model_fields[info.field_name].default_factory is list:
            return []
        return value


class _OpenPayload(_Payload):
    """Base des payloads dont les champs inconnus sont conserves."""

    model_config = ConfigDict(extra="allow")


# --- Listes et elements -----------------------------------------------------


class MediaItem(_OpenPayload):
    """Element de liste (film ou serie) tel que renvoye par les endpoints de liste."""

    id: Optional[int] = None
    title: Optional[str] = None
    name: Optional[str] = None
    original_title: Optional[str] = None
    original_name: Optional[str] = None
    genre_ids: list[int] = Field(default_factory=list)
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    vote_average: Optional[float] = None


class MediaPage(_Payload):
    """Page de resultats (popular, top_rated, search, discover, similar...)."""

    page: int = 1
    results: list[MediaItem] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class Genre(_Payload):
    id: int
    name: str = ""


class MediaDetailsPayload(_OpenPayload):
    """Fiche d'une entite (movie/{id} ou tv/{id})."""

    id: Optional[int] = None
    genres: list[Genre] = Field(default_factory=list)
    genre_ids: list[int] = Field(default_factory=list)
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


# --- Facettes d'enrichissement ----------------------------------------------


class CastMember(_Payload):
    id: Optional[int] = None
    name: Optional[str] = None
    character: Optional[str] = None
    profile_path: Optional[str] = None


class CrewMember(_Payload):
    id: Optional[int] = None
    name: Optional[str] = None
    job: Optional[str] = None
    profile_path: Optional[str] = None


class CreditsPayload(_Payload):
    cast: list[CastMember] = Field(default_factory=list)
    crew: list[CrewMember] = Field(default_factory=list)


class Video(_Payload):
    key: Optional[str] = None
    name: Optional[str] = None
    site: Optional[str] = None
    type: Optional[str] = None


class VideosPayload(_Payload):
    results: list[Video] = Field(default_factory=list)


class ImageFile(_Payload):
    file_path: Optional[str] = None


class ImagesPayload(_Payload):
    backdrops: list[ImageFile] = Field(default_factory=list)
    posters: list[ImageFile] = Field(default_factory=list)


# --- Taxonomies -------------------------------------------------------------


class GenreList(_Payload):
    genres: list[Genre] = Field(default_factory=list)


class ImagesConfiguration(_Payload):
    base_url: Optional[str] = None
    secure_base_url: Optional[str] = None
    poster_sizes: list[str] = Field(default_factory=list)
    backdrop_sizes: list[str] = Field(default_factory=list)
    profile_sizes: list[str] = Field(default_factory=list)


class ConfigurationPayload(_OpenPayload):
    images: ImagesConfiguration = Field(default_factory=ImagesConfiguration)


class LanguageEntry(_Payload):
    iso_639_1: str
    english_name: str = ""


class CountryEntry(_Payload):
    iso_3166_1: str
    english_name: str = ""


# --- Lookups par entite -----------------------------------------------------


class PersonPayload(_OpenPayload):
    id: Optional[int] = None
    name: Optional[str] = None
    profile_path: Optional[str] = None


class FilmographyPayload(_Payload):
    cast: list[MediaItem] = Field(default_factory=list)
    crew: list[MediaItem] = Field(default_factory=list)


class FranchisePayload(_OpenPayload):
    id: Optional[int] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    parts: list[MediaItem] = Field(default_factory=list)


class Keyword(_Payload):
    id: int
    name: str = ""


class KeywordsPayload(_Payload):
    # movie/{id}/keywords -> "keywords", tv/{id}/keywords -> "results"
    keywords: list[Keyword] = Field(default_factory=list)
    results: list[Keyword] = Field(default_factory=list)

    @property
    def entries(self) -> list[Keyword]:
        return self.keywords or self.results


class CompanyPayload(_OpenPayload):
    id: Optional[int] = None
    logo_path: Optional[str] = None


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(model: type[ModelT], data: Any) -> ModelT:
    """
    Valide un payload brut contre son schema.

    Raises:
        UpstreamError: Si le payload ne respecte pas le schema (reponse mal formee)
    """
    try:
        return model.model_validate(data)
    except SchemaValidationError as e:
        raise UpstreamError(
            f"Reponse mal formee ({model.__name__}): {e.error_count()} erreur(s)",
            body=data,
        ) from e


def parse_payload_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Valide une liste de payloads (ex: configuration/languages)."""
    if not isinstance(data, list):
        raise UpstreamError(f"Reponse mal formee: liste de {model.__name__} attendue", body=data)
    return [parse_payload(model, item) for item in data]
