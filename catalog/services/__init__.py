from catalog.services.catalog_service import (
    ListingLimits,
    get_department,
    get_product,
    list_brands,
    list_categories,
    list_department_products,
    list_departments,
    list_products,
)
from catalog.services.migration_service import DepartmentMigration, MigrationState
from catalog.services.query_builder import ProductQuery, build_product_query
from catalog.services.store import CatalogStore

__all__ = [
    "CatalogStore",
    "DepartmentMigration",
    "ListingLimits",
    "MigrationState",
    "ProductQuery",
    "build_product_query",
    "get_department",
    "get_product",
    "list_brands",
    "list_categories",
    "list_department_products",
    "list_departments",
    "list_products",
]
