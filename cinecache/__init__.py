"""
CineCache - Couche d'agregation et de cache devant l'API catalogue TMDB.

Ce package recupere les listes paginees et les fiches d'entites, les enrichit
(noms de genres, URLs d'images, credits, elements lies) et met les resultats
en cache pour proteger l'API amont du trafic duplique.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (erreurs, ports, objets valeur)
- services/ : Couche application (fan-out, enrichissement, flux catalogue)
- adapters/ : Couche infrastructure (client TMDB, cache memoire, fallback)
- web/ : Frontiere HTTP (FastAPI)
"""

__version__ = "0.1.0"
