"""
Validation des parametres d'appel du catalogue.

Toutes les fonctions levent ValidationError avant toute interaction avec le
cache ou l'API amont.
"""

from datetime import date
from typing import Any, Optional

from cinecache.core.errors import ValidationError

MAX_PAGE = 500  # limite imposee par TMDB
MAX_PAGE_SIZE = 100
MIN_YEAR = 1900


def validate_entity_id(value: Any, label: str = "ID") -> int:
    """Identifiant numerique strictement positif."""
    if isinstance(value, bool):
        raise ValidationError(f"{label} invalide: {value!r}")
    try:
        entity_id = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{label} invalide: {value!r}") from None
    if entity_id < 1:
        raise ValidationError(f"{label} invalide: {value!r}")
    return entity_id


def validate_page(page: Any) -> int:
    page = _as_int(page, "page")
    if not 1 <= page <= MAX_PAGE:
        raise ValidationError(f"page hors bornes (1..{MAX_PAGE}): {page}")
    return page


def validate_page_size(page_size: Any) -> int:
    page_size = _as_int(page_size, "page_size")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"page_size hors bornes (1..{MAX_PAGE_SIZE}): {page_size}")
    return page_size


def validate_year(year: Any, today: Optional[date] = None) -> int:
    """Annee entre 1900 et l'annee courante + 2."""
    year = _as_int(year, "annee")
    max_year = (today or date.today()).year + 2
    if not MIN_YEAR <= year <= max_year:
        raise ValidationError(f"Annee invalide (1900..{max_year}): {year}")
    return year


def validate_query(query: Any) -> str:
    text = str(query or "").strip()
    if not text:
        raise ValidationError("Texte de recherche vide")
    return text


def _as_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{label} doit etre un entier: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} doit etre un entier: {value!r}") from None
