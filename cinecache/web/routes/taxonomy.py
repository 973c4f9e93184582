"""
Routes de la table de reference (genres, langues, pays, configuration d'images)
et de l'etat du service.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from ...container import Container, domain_caches
from ...core.value_objects.reference_table import ReferenceTableHolder
from ..deps import get_container, get_references

router = APIRouter()

ReferencesDep = Annotated[ReferenceTableHolder, Depends(get_references)]


@router.get("/taxonomy/genres")
async def genres(references: ReferencesDep) -> list[dict[str, Any]]:
    """Genres films et series fusionnes, tries par id."""
    return [{"id": genre_id, "name": name} for genre_id, name in sorted(references.current.genres.items())]


@router.get("/taxonomy/languages")
async def languages(references: ReferencesDep) -> dict[str, str]:
    return dict(references.current.languages)


@router.get("/taxonomy/countries")
async def countries(references: ReferencesDep) -> dict[str, str]:
    return dict(references.current.countries)


@router.get("/taxonomy/configuration")
async def configuration(references: ReferencesDep) -> dict[str, Any]:
    return dict(references.current.configuration)


@router.get("/health")
async def health(container: Annotated[Container, Depends(get_container)]) -> dict[str, Any]:
    """Etat du service : table de reference chargee, taille des caches."""
    table = container.references().current
    return {
        "status": "ok",
        "reference_table": table.is_populated,
        "caches": {cache.name: len(cache) for cache in domain_caches(container)},
    }
