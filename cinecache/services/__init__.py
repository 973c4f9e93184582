"""
Couche services (cas d'utilisation du catalogue).

Les services orchestrent le cache, le fan-out et l'enrichissement pour
servir les operations de lecture :
- CatalogService : collections, recherche, fiches enrichies, agregat par genre
- LookupService : personnes, franchises, mots-cles, societes
- EnrichmentComposer : composition d'une fiche et de ses facettes
- ReferenceTableLoader : chargement des taxonomies au demarrage
- FanOutExecutor : execution parallele "tout regler, ne rien annuler"

Les services dependent des ports (core/), jamais directement du transport
HTTP concret.
"""
