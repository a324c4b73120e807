import math
from typing import Union

from catalog.core.constants import DEFAULT_PAGE, MAX_STORE_INTEGER, MIN_PAGE_LIMIT
from catalog.core.errors import InvalidPagination
from catalog.schemas.common import PaginationRead

RawNumber = Union[int, str, None]


def _coerce_int(value: RawNumber, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    value_text = str(value).strip()
    if not value_text:
        return default
    try:
        return int(value_text)
    except ValueError as exc:
        raise InvalidPagination() from exc


def parse_pagination(
    page: RawNumber,
    limit: RawNumber,
    *,
    default_limit: int,
    max_limit: int,
) -> tuple[int, int]:
    page_value = _coerce_int(page, DEFAULT_PAGE)
    limit_value = _coerce_int(limit, default_limit)
    validate_pagination(page_value, limit_value, max_limit=max_limit)
    return page_value, limit_value


def validate_pagination(page: int, limit: int, *, max_limit: int) -> None:
    if page < DEFAULT_PAGE or limit < MIN_PAGE_LIMIT or limit > max_limit:
        raise InvalidPagination()


def compute_offset(page: int, limit: int) -> int:
    # Pages beyond the bind range are simply empty.
    return min((page - 1) * limit, MAX_STORE_INTEGER)


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit)


def build_pagination(total_count: int, page: int, limit: int) -> PaginationRead:
    pages = total_pages(total_count, limit)
    return PaginationRead(
        current_page=page,
        total_pages=pages,
        total_count=total_count,
        limit=limit,
        has_next_page=page < pages,
        has_prev_page=page > 1,
    )


__all__ = [
    "build_pagination",
    "compute_offset",
    "parse_pagination",
    "total_pages",
    "validate_pagination",
]
