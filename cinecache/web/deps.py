"""
Dependances partagees de l'application web.

Les routes recuperent leurs services depuis le Container DI attache a
app.state par create_app().
"""

from fastapi import Request

from ..container import Container
from ..core.value_objects.reference_table import ReferenceTableHolder
from ..services.catalog import CatalogService
from ..services.lookups import LookupService


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_catalog(request: Request) -> CatalogService:
    return get_container(request).catalog_service()


def get_lookups(request: Request) -> LookupService:
    return get_container(request).lookup_service()


def get_references(request: Request) -> ReferenceTableHolder:
    return get_container(request).references()
