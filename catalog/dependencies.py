from functools import lru_cache

from catalog.config import get_settings
from catalog.database.session import SessionLocal
from catalog.services.catalog_service import ListingLimits
from catalog.services.store import CatalogStore


@lru_cache
def get_store() -> CatalogStore:
    settings = get_settings()
    return CatalogStore(
        SessionLocal,
        timeout_seconds=settings.QUERY_TIMEOUT_SECONDS,
        max_workers=settings.QUERY_WORKERS,
    )


def product_limits() -> ListingLimits:
    settings = get_settings()
    return ListingLimits(
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT,
        strict_department=settings.STRICT_DEPARTMENT_FILTER,
    )


def department_product_limits() -> ListingLimits:
    settings = get_settings()
    return ListingLimits(
        default_limit=settings.DEPARTMENT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT,
    )


__all__ = ["department_product_limits", "get_store", "product_limits"]
