"""
Interface web JSON de CineCache (FastAPI).

create_app() construit l'application ; les routes ne manipulent que les
services exposes par le Container DI.
"""

from cinecache.web.app import create_app

__all__ = ["create_app"]
