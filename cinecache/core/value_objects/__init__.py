"""
Objets valeur immutables du catalogue.

Exports :
- MediaKind, Listing, Relation : types de media et listes de l'API amont
- CollectionFilters, Pagination, CollectionPage : requetes et pages de collection
- EnrichmentDepth, SubFetchSpec, Fulfilled, Rejected, SubFetchOutcome : enrichissement
- ReferenceTable, ReferenceTableHolder : taxonomies et URLs d'images
"""

from cinecache.core.value_objects.enrichment import (
    EnrichmentDepth,
    Fulfilled,
    Rejected,
    SubFetchOutcome,
    SubFetchSpec,
)
from cinecache.core.value_objects.media import (
    CollectionFilters,
    CollectionPage,
    Listing,
    MediaKind,
    Pagination,
    Relation,
)
from cinecache.core.value_objects.reference_table import (
    ReferenceTable,
    ReferenceTableHolder,
)

__all__ = [
    "CollectionFilters",
    "CollectionPage",
    "EnrichmentDepth",
    "Fulfilled",
    "Listing",
    "MediaKind",
    "Pagination",
    "ReferenceTable",
    "ReferenceTableHolder",
    "Rejected",
    "Relation",
    "SubFetchOutcome",
    "SubFetchSpec",
]
