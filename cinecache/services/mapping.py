"""
Projection des elements bruts de l'API vers les documents de sortie.

Toutes les fonctions sont synchrones et pures : elles lisent la table de
reference (immuable) et ne font aucun appel reseau.
"""

from typing import Any, Optional

from cinecache.adapters.api.schemas import MediaItem
from cinecache.core.value_objects.media import MediaKind
from cinecache.core.value_objects.reference_table import ReferenceTable


def release_year(date: Optional[str]) -> Optional[int]:
    """Annee depuis une date YYYY-MM-DD, None si absente ou illisible."""
    if not date or len(date) < 4 or not date[:4].isdigit():
        return None
    return int(date[:4])


def item_title(item: MediaItem, media: MediaKind) -> Optional[str]:
    if media is MediaKind.MOVIE:
        return item.title or item.original_title
    return item.name or item.original_name


def item_date(item: MediaItem, media: MediaKind) -> Optional[str]:
    if media is MediaKind.MOVIE:
        return item.release_date
    return item.first_air_date


def map_item(
    item: MediaItem,
    media: MediaKind,
    table: ReferenceTable,
) -> dict[str, Any]:
    """
    Element de liste enrichi par la table de reference.

    Les champs bruts sont conserves ; s'y ajoutent genres (noms), poster_url,
    backdrop_url et release_year. Pour les series, title est renseigne depuis
    name pour que les deux types partagent le meme champ de titre.
    """
    document = item.model_dump(exclude_unset=True)
    if media is MediaKind.TV and "title" not in document:
        document["title"] = item_title(item, media)
    document["genres"] = table.genre_names(item.genre_ids)
    document["poster_url"] = table.poster_url(item.poster_path)
    document["backdrop_url"] = table.backdrop_url(item.backdrop_path)
    document["release_year"] = release_year(item_date(item, media))
    return document


def map_items(items: list[MediaItem], media: MediaKind, table: ReferenceTable) -> list[dict[str, Any]]:
    return [map_item(item, media, table) for item in items]


def thin_item(item: MediaItem, media: MediaKind, table: ReferenceTable) -> dict[str, Any]:
    """Projection reduite d'un element lie : id, titre, poster, date, note."""
    return {
        "id": item.id,
        "title": item_title(item, media),
        "poster_url": table.poster_url(item.poster_path),
        "release_date": item_date(item, media),
        "vote_average": item.vote_average,
    }
