"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console : lisible, coloree, pour suivre le serveur en direct
- fichier : JSON avec rotation, pour l'analyse des appels amont et du cache
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <7}</level> "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def _only_cinecache(record: dict) -> bool:
    return record["name"].startswith("cinecache")


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinecache.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les sorties loguru par celles de CineCache.

    Le fichier ne recoit que les messages du package cinecache, y compris
    les hits/miss du cache et les appels amont logges en DEBUG.

    Args :
        log_level : Niveau minimum de la console
        log_file : Fichier JSON (repertoire cree si absent)
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre d'archives zip conservees
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        filter=_only_cinecache,
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(f"Logs ecrits dans {log_file} (rotation {rotation_size}, {retention_count} archives)")
