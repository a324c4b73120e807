from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog.dependencies import department_product_limits, get_store
from catalog.schemas.department import DepartmentListResponse, DepartmentResponse
from catalog.schemas.product import DepartmentProductsResponse
from catalog.services.catalog_service import (
    ListingLimits,
    get_department,
    list_department_products,
    list_departments,
)
from catalog.services.query_builder import ProductQuery
from catalog.services.store import CatalogStore

router = APIRouter(prefix="/api/departments", tags=["Departments"])


@router.get("", response_model=DepartmentListResponse)
def read_departments(store: CatalogStore = Depends(get_store)):
    return DepartmentListResponse(data=list_departments(store))


@router.get("/{department_id}", response_model=DepartmentResponse)
def read_department(department_id: str, store: CatalogStore = Depends(get_store)):
    return DepartmentResponse(data=get_department(store, department_id))


@router.get("/{department_id}/products", response_model=DepartmentProductsResponse)
def read_department_products(
    department_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    search: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    store: CatalogStore = Depends(get_store),
    limits: ListingLimits = Depends(department_product_limits),
):
    query = ProductQuery(
        page=page,
        limit=limit,
        category=category,
        brand=brand,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = list_department_products(store, department_id, query, limits)
    return DepartmentProductsResponse(
        data=result.items,
        pagination=result.pagination,
        department=result.department,
        filters=result.filters,
    )


__all__ = ["router"]
