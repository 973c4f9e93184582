"""
Commandes CLI de consultation du catalogue.

Les commandes passent par les memes services que l'API web ; les erreurs du
catalogue sont affichees en rouge et terminent la commande avec le code 1.
"""

from typing import Annotated, Any, Optional

import typer
from rich.table import Table

from cinecache.core.errors import CatalogError
from cinecache.core.value_objects.media import CollectionPage

from .helpers import async_command, console, suppress_loguru, with_container


def _fail(error: CatalogError) -> None:
    console.print(f"[red]Erreur ({error.kind}) : {error}[/red]")
    raise typer.Exit(code=1)


def _print_page(title: str, page: CollectionPage) -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="bold")
    table.add_column("Annee", justify="right")
    table.add_column("Genres")
    table.add_column("Note", justify="right")

    for item in page.items:
        vote = item.get("vote_average")
        table.add_row(
            str(item.get("id", "")),
            item.get("title") or "",
            str(item.get("release_year") or ""),
            ", ".join(item.get("genres", [])),
            f"{vote:.1f}" if isinstance(vote, (int, float)) else "",
        )

    with suppress_loguru():
        console.print(table)
        pagination = page.pagination
        total = f"/{pagination.total_pages}" if pagination.total_pages is not None else ""
        more = "oui" if pagination.has_more else "non"
        console.print(f"[dim]Page {pagination.current_page}{total} - suite : {more}[/dim]")


@async_command
@with_container()
async def popular(
    container,
    media: Annotated[str, typer.Option("--media", "-m", help="movie ou tv")] = "movie",
    listing: Annotated[str, typer.Option("--listing", "-l", help="popular, top-rated, upcoming...")] = "popular",
    page: Annotated[int, typer.Option("--page", "-p")] = 1,
) -> None:
    """Affiche une liste standard (populaires par defaut)."""
    try:
        result = await container.catalog_service().get_collection(media, page=page, listing=listing)
    except CatalogError as e:
        _fail(e)
    _print_page(f"{media} / {listing}", result)


@async_command
@with_container()
async def search(
    container,
    query: Annotated[str, typer.Argument(help="Texte recherche")],
    media: Annotated[str, typer.Option("--media", "-m", help="movie ou tv")] = "movie",
    page: Annotated[int, typer.Option("--page", "-p")] = 1,
) -> None:
    """Recherche un film ou une serie par titre."""
    try:
        result = await container.catalog_service().search_collection(media, query, page=page)
    except CatalogError as e:
        _fail(e)
    if not result.items:
        console.print(f"[yellow]Aucun resultat pour '{query}'[/yellow]")
        return
    _print_page(f"Recherche : {query}", result)


@async_command
@with_container()
async def details(
    container,
    entity_id: Annotated[int, typer.Argument(help="Identifiant TMDB")],
    media: Annotated[str, typer.Option("--media", "-m", help="movie ou tv")] = "movie",
    depth: Annotated[str, typer.Option("--depth", "-d", help="basic ou detailed")] = "detailed",
) -> None:
    """Affiche la fiche enrichie d'un film ou d'une serie."""
    try:
        record = await container.catalog_service().get_entity_details(entity_id, depth, media)
    except CatalogError as e:
        _fail(e)

    with suppress_loguru():
        title = record.get("title") or record.get("name") or str(entity_id)
        date = record.get("release_date") or record.get("first_air_date") or ""
        console.print(f"[bold cyan]{title}[/bold cyan] {date}")
        console.print(f"Genres : {', '.join(record.get('genres') or []) or '-'}")
        if record.get("overview"):
            console.print(record["overview"])
        _print_credits(record.get("credits"))
        for video in record.get("videos") or []:
            console.print(f"  [magenta]{video.get('type') or 'Video'}[/magenta] {video.get('url')}")
        related = record.get("related_items") or []
        if related:
            console.print("Similaires : " + ", ".join(str(item.get("title")) for item in related))


def _print_credits(credits: Optional[dict[str, Any]]) -> None:
    if not credits:
        return
    cast = ", ".join(f"{p.get('name')} ({p.get('character')})" for p in credits.get("cast", []))
    if cast:
        console.print(f"Distribution : {cast}")
    for person in credits.get("crew", []):
        console.print(f"  {person.get('job')} : {person.get('name')}")


@async_command
@with_container()
async def taxonomy(
    container,
    kind: Annotated[str, typer.Argument(help="genres, languages ou countries")] = "genres",
) -> None:
    """Affiche une taxonomie de la table de reference."""
    table_ref = container.references().current
    mappings = {
        "genres": table_ref.genres,
        "languages": table_ref.languages,
        "countries": table_ref.countries,
    }
    if kind not in mappings:
        console.print(f"[red]Taxonomie inconnue : {kind}[/red]")
        raise typer.Exit(code=1)
    if not table_ref.is_populated:
        console.print("[yellow]Table de reference non chargee (jeton TMDB manquant ?)[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=kind)
    table.add_column("Code", style="dim")
    table.add_column("Nom")
    for code, name in sorted(mappings[kind].items()):
        table.add_row(str(code), name)
    with suppress_loguru():
        console.print(table)
