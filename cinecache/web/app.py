"""
Application FastAPI de CineCache.

Attache le Container DI a l'application, configure CORS et les handlers
d'erreurs, et monte les routes JSON.

Cycle de vie (lifespan) :
- demarrage : logging, chargement de la table de reference, balayage des caches
- arret : arret des balayages, fermeture du client HTTP
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .. import __version__
from ..container import Container, domain_caches
from ..logging_config import configure_logging
from .errors import register_error_handlers
from .routes.media import movies_router, series_router
from .routes.taxonomy import router as taxonomy_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise la table de reference et les caches au demarrage, libere tout a l'arret."""
    container: Container = app.state.container
    settings = container.config()

    if app.state.setup_logging:
        configure_logging(
            log_level=settings.log_level,
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )

    if settings.tmdb_enabled:
        await container.reference_loader().initialize(container.references())
    else:
        logger.warning("CINECACHE_TMDB_API_TOKEN absent : table de reference non chargee")

    caches = domain_caches(container)
    for cache in caches:
        cache.start_sweeper()

    yield

    for cache in caches:
        await cache.stop_sweeper()
    await container.tmdb_client().close()
    logger.info("CineCache arrete")


def create_app(container: Optional[Container] = None, setup_logging: bool = True) -> FastAPI:
    """
    Construit l'application web.

    Args:
        container: Container DI a utiliser (un nouveau par defaut)
        setup_logging: Configure loguru au demarrage (desactive dans les tests)
    """
    container = container or Container()
    settings = container.config()

    app = FastAPI(title="CineCache", version=__version__, lifespan=lifespan)
    app.state.container = container
    app.state.setup_logging = setup_logging

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(movies_router, prefix="/movies", tags=["movies"])
    app.include_router(series_router, prefix="/series", tags=["series"])
    app.include_router(taxonomy_router)
    return app
