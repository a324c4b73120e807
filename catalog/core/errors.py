"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``catalog.main`` turns them into the JSON envelope.
Only ``CatalogError.message`` ever reaches a caller, and ``StoreError``
always reports the generic message.
"""

from catalog.core.constants import GENERIC_ERROR_MESSAGE, INVALID_PAGINATION_MESSAGE


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400


class InvalidPagination(ValidationError):
    def __init__(self, message: str = INVALID_PAGINATION_MESSAGE):
        super().__init__(message)


class NotFoundError(CatalogError):
    status_code = 404


class StoreError(CatalogError):
    """Underlying store failure. ``detail`` is for logs only."""

    def __init__(self, detail: str):
        super().__init__(GENERIC_ERROR_MESSAGE)
        self.detail = detail


__all__ = [
    "CatalogError",
    "InvalidPagination",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
