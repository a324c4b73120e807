from catalog.routers.departments import router as departments_router
from catalog.routers.facets import router as facets_router
from catalog.routers.health import router as health_router
from catalog.routers.products import router as products_router

__all__ = [
    "departments_router",
    "facets_router",
    "health_router",
    "products_router",
]
