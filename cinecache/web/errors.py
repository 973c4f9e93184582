"""
Traduction des erreurs du catalogue en reponses HTTP.

Le moteur ne connait que des genres d'erreurs (CatalogError.kind) ; seul ce
module choisit les codes de reponse :
- ValidationError -> 400
- NotFoundError -> 404
- UpstreamRateLimited -> 429 (+ Retry-After si connu)
- UpstreamError -> 502
- autre CatalogError -> 500

Corps de reponse : {"error": <kind>, "detail": <message>}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.errors import (
    CatalogError,
    NotFoundError,
    UpstreamError,
    UpstreamRateLimited,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[CatalogError], int], ...] = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (UpstreamRateLimited, 429),
    (UpstreamError, 502),
)


def status_for(error: CatalogError) -> int:
    """Code HTTP associe a une erreur du catalogue (l'ordre compte : 429 avant 502)."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} -> {status}: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status}: {exc}")

    headers = {}
    if isinstance(exc, UpstreamRateLimited) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)
    return JSONResponse(
        status_code=status,
        content={"error": exc.kind, "detail": str(exc)},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Parametres de requete mal types : meme forme que ValidationError."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in errors
    )
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.kind, "detail": detail},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
