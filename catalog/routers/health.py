from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from catalog.config import get_settings
from catalog.dependencies import get_store
from catalog.services.store import CatalogStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(response: Response, store: CatalogStore = Depends(get_store)):
    settings = get_settings()
    database_ok = store.ping()
    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if database_ok else "degraded",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if database_ok else "unavailable",
        "time": datetime.now(timezone.utc).isoformat(),
    }
