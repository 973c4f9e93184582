"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe CINECACHE_,
et peut optionnellement etre fournie via un fichier .env.

Le jeton TMDB est optionnel : sans lui le serveur demarre, mais la table de reference
reste vide et les appels amont echouent en 401.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env a la racine du projet (parent de cinecache/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe CINECACHE_.
    Exemple : CINECACHE_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINECACHE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API TMDB (cle v3 ou jeton v4)
    tmdb_api_token: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_language: str = Field(default="en-US")
    request_timeout: float = Field(default=30.0, gt=0)

    # Cache (secondes)
    collection_cache_ttl: int = Field(default=3600)
    detail_cache_ttl: int = Field(default=3600)
    genre_cache_ttl: int = Field(default=3600)
    cache_sweep_interval: int = Field(default=600, ge=1)

    # Fan-out (None = toutes les sous-requetes en parallele)
    fan_out_max_concurrency: Optional[int] = Field(default=None, ge=1)

    # Tailles d'images TMDB
    poster_size: str = Field(default="w500")
    backdrop_size: str = Field(default="w1280")
    profile_size: str = Field(default="w185")

    # Serveur HTTP
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinecache.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("collection_cache_ttl", "detail_cache_ttl", "genre_cache_ttl")
    @classmethod
    def positive_ttl(cls, v: int) -> int:
        """Un TTL nul rendrait chaque entree invisible des son insertion."""
        if v < 1:
            raise ValueError("le TTL doit etre >= 1 seconde")
        return v

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_token)
