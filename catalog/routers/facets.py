from fastapi import APIRouter, Depends

from catalog.dependencies import get_store
from catalog.schemas.common import StringListResponse
from catalog.services.catalog_service import list_brands, list_categories
from catalog.services.store import CatalogStore

router = APIRouter(prefix="/api", tags=["Facets"])


@router.get("/categories", response_model=StringListResponse)
def read_categories(store: CatalogStore = Depends(get_store)):
    return StringListResponse(data=list_categories(store))


@router.get("/brands", response_model=StringListResponse)
def read_brands(store: CatalogStore = Depends(get_store)):
    return StringListResponse(data=list_brands(store))


__all__ = ["router"]
