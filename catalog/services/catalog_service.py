import logging
import re
from dataclasses import dataclass
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalog.core.constants import MAX_STORE_INTEGER
from catalog.core.errors import NotFoundError, ValidationError
from catalog.models.department import Department
from catalog.models.product import Product
from catalog.schemas.common import PaginationRead
from catalog.schemas.department import DepartmentRead, DepartmentWithCount
from catalog.schemas.product import AppliedFilters, ProductWithDepartment
from catalog.services.join_resolver import (
    attach_department,
    attach_departments,
    load_departments,
    to_product_payload,
)
from catalog.services.pagination import build_pagination
from catalog.services.query_builder import (
    ProductQuery,
    ProductQueryPlan,
    build_product_query,
    find_department_id,
)
from catalog.services.store import CatalogStore

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")
_MAX_ID_DIGITS = len(str(MAX_STORE_INTEGER))

PRODUCT_NOT_FOUND_MESSAGE = "Product with ID {} not found"
DEPARTMENT_NOT_FOUND_MESSAGE = "Department not found"


@dataclass
class ListingLimits:
    default_limit: int
    max_limit: int
    strict_department: bool = False


@dataclass
class ProductPage:
    items: List[ProductWithDepartment]
    pagination: PaginationRead


@dataclass
class DepartmentProductPage(ProductPage):
    department: DepartmentRead
    filters: AppliedFilters


def parse_identifier(raw_id: str, message: str, missing_message: str) -> int:
    """Parse an all-digit id. Ids past the store's integer range cannot exist."""
    value = str(raw_id).strip()
    if not _DIGITS.fullmatch(value):
        raise ValidationError(message)
    digits = value.lstrip("0") or "0"
    if len(digits) > _MAX_ID_DIGITS or int(digits) > MAX_STORE_INTEGER:
        raise NotFoundError(missing_message.format(digits))
    return int(digits)


def _fetch_page(store: CatalogStore, plan: ProductQueryPlan) -> tuple[list[Product], int]:
    products, total_count = store.gather(
        lambda db: list(db.execute(plan.page_statement()).scalars().all()),
        lambda db: db.execute(plan.count_statement()).scalar_one(),
    )
    return products, int(total_count)


def list_products(store: CatalogStore, query: ProductQuery, limits: ListingLimits) -> ProductPage:
    plan = build_product_query(
        query,
        default_limit=limits.default_limit,
        max_limit=limits.max_limit,
        department_lookup=lambda name: store.run(lambda db: find_department_id(db, name)),
        strict_department=limits.strict_department,
    )
    products, total_count = _fetch_page(store, plan)
    items = store.run(lambda db: attach_departments(db, products)) if products else []
    logger.debug(
        "Listed %d of %d products (page %d, limit %d)",
        len(items),
        total_count,
        plan.page,
        plan.limit,
    )
    return ProductPage(items=items, pagination=build_pagination(total_count, plan.page, plan.limit))


def get_product(store: CatalogStore, raw_id: str) -> ProductWithDepartment:
    product_id = parse_identifier(raw_id, "Invalid product ID format", PRODUCT_NOT_FOUND_MESSAGE)

    def _load(db: Session):
        product = db.execute(select(Product).where(Product.id == product_id)).scalars().first()
        if product is None:
            return None
        department = load_departments(db, [product.department_id]).get(product.department_id)
        return to_product_payload(product, department)

    payload = store.run(_load)
    if payload is None:
        raise NotFoundError(PRODUCT_NOT_FOUND_MESSAGE.format(product_id))
    return payload


def list_departments(store: CatalogStore) -> list[DepartmentRead]:
    departments = store.run(
        lambda db: db.execute(
            select(Department).where(Department.is_active.is_(True)).order_by(Department.name)
        )
        .scalars()
        .all()
    )
    return [DepartmentRead.model_validate(department) for department in departments]


def _get_department_or_404(db: Session, department_id: int) -> Department:
    department = db.get(Department, department_id)
    if department is None:
        raise NotFoundError(DEPARTMENT_NOT_FOUND_MESSAGE)
    return department


def get_department(store: CatalogStore, raw_id: str) -> DepartmentWithCount:
    department_id = parse_identifier(raw_id, "Invalid department ID", DEPARTMENT_NOT_FOUND_MESSAGE)

    def _load(db: Session) -> DepartmentWithCount:
        department = _get_department_or_404(db, department_id)
        product_count = db.execute(
            select(func.count()).select_from(Product).where(Product.department_id == department_id)
        ).scalar_one()
        base = DepartmentRead.model_validate(department).model_dump()
        return DepartmentWithCount(**base, product_count=product_count)

    return store.run(_load)


def list_department_products(
    store: CatalogStore,
    raw_id: str,
    query: ProductQuery,
    limits: ListingLimits,
) -> DepartmentProductPage:
    department_id = parse_identifier(raw_id, "Invalid department ID", DEPARTMENT_NOT_FOUND_MESSAGE)
    plan = build_product_query(
        query,
        default_limit=limits.default_limit,
        max_limit=limits.max_limit,
        scope_department_id=department_id,
    )
    department = store.run(lambda db: _get_department_or_404(db, department_id))
    products, total_count = _fetch_page(store, plan)

    return DepartmentProductPage(
        items=attach_department(products, department),
        pagination=build_pagination(total_count, plan.page, plan.limit),
        department=DepartmentRead.model_validate(department),
        filters=AppliedFilters(
            category=plan.category,
            brand=plan.brand,
            min_price=plan.min_price,
            max_price=plan.max_price,
            search=plan.search,
            sort_by=plan.sort_by,
            sort_order=plan.sort_order,
        ),
    )


def _distinct_values(store: CatalogStore, column) -> list[str]:
    values = store.run(
        lambda db: db.execute(select(column).where(column.is_not(None)).distinct()).scalars().all()
    )
    return sorted(values)


def list_categories(store: CatalogStore) -> list[str]:
    return _distinct_values(store, Product.category)


def list_brands(store: CatalogStore) -> list[str]:
    return _distinct_values(store, Product.brand)


__all__ = [
    "DepartmentProductPage",
    "ListingLimits",
    "ProductPage",
    "get_department",
    "get_product",
    "list_brands",
    "list_categories",
    "list_department_products",
    "list_departments",
    "parse_identifier",
]
