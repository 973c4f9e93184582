"""
Strategie primaire/secours pour les appels a l'API amont.

Un seul saut : si l'appel principal echoue pour une raison autre que le
rate limiting, l'appel de secours est tente une fois et son resultat (ou
son erreur) est retourne tel quel. Un 429 est repropage immediatement :
le secours serait tres probablement limite lui aussi et consommerait du
quota pour rien.

Usage:
    response = await fetch_with_fallback(
        lambda: client.call("movie/popular", {"page": 2}),
        lambda: client.call("movie/top_rated", {"page": 2}),
    )
"""

from typing import Awaitable, Callable, TypeVar

from loguru import logger

from cinecache.core.errors import UpstreamRateLimited

T = TypeVar("T")


def is_fallback_eligible(error: BaseException) -> bool:
    """
    Indique si un echec de l'appel principal autorise le secours.

    Tout echec (ressource introuvable, reponse mal formee, erreur reseau
    transitoire, 5xx) est eligible, sauf le rate limiting.
    """
    return not isinstance(error, UpstreamRateLimited)


async def fetch_with_fallback(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[], Awaitable[T]],
) -> T:
    """
    Execute `primary`, puis `fallback` si l'echec est eligible.

    Args:
        primary: Fabrique de coroutine de l'appel principal
        fallback: Fabrique de coroutine de l'appel de secours

    Returns:
        Le resultat de l'appel principal, ou celui du secours

    Raises:
        UpstreamRateLimited: Si l'appel principal est limite (secours jamais appele)
        Exception: Toute erreur du secours, sans nouvelle tentative
    """
    try:
        return await primary()
    except Exception as error:
        if not is_fallback_eligible(error):
            raise
        logger.warning(f"Echec de l'appel principal, bascule sur le secours: {error}")
    return await fallback()
