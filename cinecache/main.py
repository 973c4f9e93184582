"""
Point d'entree CLI de CineCache.

Configure le logging et fournit les commandes CLI (serveur web et
consultation du catalogue).
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import details, popular, search, taxonomy
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="cinecache",
    help="Agregateur de catalogue films et series avec cache",
)

app.command()(popular)
app.command()(search)
app.command()(details)
app.command()(taxonomy)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Logs console en DEBUG"),
    ] = False,
) -> None:
    """CineCache - catalogue TMDB agrege et mis en cache."""
    settings = Settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration CineCache")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'} ({config.tmdb_base_url})")
    typer.echo(f"Langue : {config.tmdb_language}")
    typer.echo(
        "TTL caches (s) : "
        f"collections={config.collection_cache_ttl} "
        f"fiches={config.detail_cache_ttl} "
        f"genres={config.genre_cache_ttl}"
    )
    typer.echo(f"Balayage des caches : toutes les {config.cache_sweep_interval}s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineCache v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web CineCache."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    uvicorn.run("cinecache.web.app:create_app", factory=True, host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
