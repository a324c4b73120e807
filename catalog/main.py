import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.config import Settings, get_settings
from catalog.core.constants import (
    API_ENDPOINTS,
    GENERIC_ERROR_MESSAGE,
    ROUTE_NOT_FOUND_MESSAGE,
)
from catalog.core.errors import CatalogError, StoreError
from catalog.core.logging import request_context, setup_logging
from catalog.database import Base, engine
from catalog.dependencies import get_store
from catalog.models import import_all_models
from catalog.routers import (
    departments_router,
    facets_router,
    health_router,
    products_router,
)
from catalog.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info("%s starting (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    try:
        yield
    finally:
        get_store().close()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(products_router)
app.include_router(departments_router)
app.include_router(facets_router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(
        "Store error: %s",
        exc.detail,
        exc_info=exc,
        extra=request_context(request.method, request.url.path, exc.status_code),
    )
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    logger.info(
        "Rejected request: %s",
        exc.message,
        extra=request_context(request.method, request.url.path, exc.status_code),
    )
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    logger.debug("Rejected request parameters: %s", exc.errors())
    return _error_response(400, "Invalid request parameters")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error_response(404, ROUTE_NOT_FOUND_MESSAGE)
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra=request_context(request.method, request.url.path, 500),
    )
    return _error_response(500, GENERIC_ERROR_MESSAGE)


@app.get("/")
def root():
    return {
        "success": True,
        "message": "{} is running!".format(settings.APP_NAME),
        "endpoints": API_ENDPOINTS,
    }


__all__ = ["app", "root"]
