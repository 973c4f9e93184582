"""
Executeur fan-out : lance des appels independants en parallele et recolte
toutes les issues.

Politique "tout regler, ne rien annuler" : chaque unite tourne jusqu'a son
terme (succes ou echec), l'echec d'une unite n'annule ni ne retarde les
autres, et run_all ne rend la main qu'une fois toutes les unites terminees.
Les issues sont rendues dans l'ordre de soumission, independamment de
l'ordre de completion.
"""

import asyncio
from typing import Optional, Sequence

from loguru import logger

from cinecache.core.value_objects.enrichment import (
    Fulfilled,
    Rejected,
    SubFetchOutcome,
    SubFetchSpec,
)


class FanOutExecutor:
    """
    Execute un lot de SubFetchSpec en parallele.

    Attributes:
        max_concurrency: Nombre maximum d'unites actives simultanement par lot
                         (None = toutes en meme temps)

    Example:
        executor = FanOutExecutor()
        outcomes = await executor.run_all([
            SubFetchSpec("credits", lambda: client.call("movie/1/credits")),
            SubFetchSpec("videos", lambda: client.call("movie/1/videos")),
        ])
        credits = outcomes[0].value if outcomes[0].ok else None
    """

    def __init__(self, max_concurrency: Optional[int] = None) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency doit etre >= 1")
        self.max_concurrency = max_concurrency

    async def run_all(self, specs: Sequence[SubFetchSpec]) -> list[SubFetchOutcome]:
        """
        Execute toutes les unites et retourne une issue par unite.

        Args:
            specs: Unites a executer

        Returns:
            Liste d'issues Fulfilled/Rejected, meme longueur et meme ordre que specs
        """
        outcomes: list[Optional[SubFetchOutcome]] = [None] * len(specs)
        if not specs:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def settle(index: int, spec: SubFetchSpec) -> None:
            try:
                if semaphore is None:
                    value = await spec.invoke()
                else:
                    async with semaphore:
                        value = await spec.invoke()
            except Exception as error:
                logger.warning(f"Sous-requete '{spec.key}' en echec: {error}")
                outcomes[index] = Rejected(key=spec.key, error=error)
            else:
                outcomes[index] = Fulfilled(key=spec.key, value=value)

        # settle() ne leve jamais d'Exception : le TaskGroup n'annule donc
        # aucune unite et attend la fin de toutes.
        async with asyncio.TaskGroup() as group:
            for index, spec in enumerate(specs):
                group.create_task(settle(index, spec), name=f"fan-out-{spec.key}")

        return [outcome for outcome in outcomes if outcome is not None]
