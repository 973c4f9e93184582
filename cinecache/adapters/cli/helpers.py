"""
Outils communs aux commandes CLI.

- console : sortie Rich partagee
- suppress_loguru : coupe les logs cinecache le temps d'un rendu Rich
- with_container : fournit un Container pret (table de reference chargee)
- async_command : expose une coroutine comme commande Typer synchrone
"""

import asyncio
import inspect
from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from cinecache.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """Evite que les logs du package s'intercalent dans un tableau Rich."""
    loguru_logger.disable("cinecache")
    try:
        yield
    finally:
        loguru_logger.enable("cinecache")


def with_container(load_references: bool = True):
    """
    Passe un Container neuf en premier argument de la commande.

    Args:
        load_references: Charge genres, langues, pays et URLs d'images
                         avant d'executer la commande.

    Le client HTTP est ferme a la sortie, meme si la commande echoue.
    """
    def decorator(func):
        @wraps(func)
        async def run_with_container(*args, **kwargs):
            container = Container()
            try:
                if load_references:
                    await container.reference_loader().initialize(container.references())
                return await func(container, *args, **kwargs)
            finally:
                await container.tmdb_client().close()
        return run_with_container
    return decorator


def async_command(func):
    """
    Execute la coroutine dans asyncio.run() pour Typer.

    La signature exposee a Typer omet le parametre `container`, injecte
    par with_container.
    """
    @wraps(func)
    def run_sync(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    signature = inspect.signature(func)
    parameters = [p for name, p in signature.parameters.items() if name != "container"]
    run_sync.__signature__ = signature.replace(parameters=parameters)
    return run_sync
