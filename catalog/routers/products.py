from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog.dependencies import get_store, product_limits
from catalog.schemas.product import ProductListResponse, ProductResponse
from catalog.services.catalog_service import ListingLimits, get_product, list_products
from catalog.services.query_builder import ProductQuery
from catalog.services.store import CatalogStore

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductListResponse)
def read_products(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None, description="Case-insensitive substring"),
    brand: Optional[str] = Query(None, description="Case-insensitive substring"),
    department: Optional[str] = Query(None, description="Department id or name"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    search: Optional[str] = Query(None, description="Matches name, category or brand"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    store: CatalogStore = Depends(get_store),
    limits: ListingLimits = Depends(product_limits),
):
    query = ProductQuery(
        page=page,
        limit=limit,
        category=category,
        brand=brand,
        department=department,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = list_products(store, query, limits)
    return ProductListResponse(data=result.items, pagination=result.pagination)


@router.get("/{product_id}", response_model=ProductResponse)
def read_product(product_id: str, store: CatalogStore = Depends(get_store)):
    return ProductResponse(data=get_product(store, product_id))


__all__ = ["router"]
