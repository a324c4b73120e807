"""Translate listing requests into SQLAlchemy statements.

Everything here is validated before the store is touched: pagination and
sort field are checked first, and the only store access (resolving a
department name) goes through a caller-supplied lookup.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from sqlalchemy import false, func, or_, select
from sqlalchemy.orm import Session

from catalog.core.constants import (
    MAX_STORE_INTEGER,
    SORT_ASC,
    SORT_DESC,
    SORTABLE_PRODUCT_FIELDS,
)
from catalog.core.errors import ValidationError
from catalog.models.department import Department
from catalog.models.product import Product
from catalog.services.pagination import compute_offset, parse_pagination

DepartmentLookup = Callable[[str], Optional[int]]

DEFAULT_SORT_FIELD = "id"


@dataclass
class ProductQuery:
    page: Any = None
    limit: Any = None
    category: Optional[str] = None
    brand: Optional[str] = None
    department: Optional[str] = None
    search: Optional[str] = None
    min_price: Any = None
    max_price: Any = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass
class ProductQueryPlan:
    page: int
    limit: int
    offset: int
    sort_by: str
    sort_order: str
    category: Optional[str] = None
    brand: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    department_id: Optional[int] = None
    conditions: list = field(default_factory=list)
    order_by: list = field(default_factory=list)

    def page_statement(self):
        return (
            select(Product)
            .where(*self.conditions)
            .order_by(*self.order_by)
            .offset(self.offset)
            .limit(self.limit)
        )

    def count_statement(self):
        return select(func.count()).select_from(Product).where(*self.conditions)


def clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value_text = str(value).strip()
    return value_text or None


def parse_price(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    value_text = str(value).strip()
    if not value_text:
        return None
    try:
        price = float(value_text)
    except (ValueError, OverflowError) as exc:
        raise ValidationError("{} must be a number".format(name)) from exc
    if not math.isfinite(price):
        raise ValidationError("{} must be a number".format(name))
    return price


def resolve_sort(sort_by: Optional[str], sort_order: Optional[str]) -> tuple[str, str, list]:
    field_name = clean_text(sort_by) or DEFAULT_SORT_FIELD
    attribute = SORTABLE_PRODUCT_FIELDS.get(field_name)
    if attribute is None:
        raise ValidationError("Invalid sort field: {}".format(field_name))

    order = SORT_DESC if (clean_text(sort_order) or "").lower() == SORT_DESC else SORT_ASC
    column = getattr(Product, attribute)
    order_by = [column.desc() if order == SORT_DESC else column.asc()]
    if attribute != "id":
        order_by.append(Product.id.desc() if order == SORT_DESC else Product.id.asc())
    return field_name, order, order_by


def text_conditions(
    *,
    category: Optional[str],
    brand: Optional[str],
    search: Optional[str],
) -> list:
    conditions = []
    if category:
        conditions.append(Product.category.icontains(category, autoescape=True))
    if brand:
        conditions.append(Product.brand.icontains(brand, autoescape=True))
    if search:
        conditions.append(
            or_(
                Product.name.icontains(search, autoescape=True),
                Product.category.icontains(search, autoescape=True),
                Product.brand.icontains(search, autoescape=True),
            )
        )
    return conditions


def price_conditions(min_price: Optional[float], max_price: Optional[float]) -> list:
    conditions = []
    if min_price is not None:
        conditions.append(Product.retail_price >= min_price)
    if max_price is not None:
        conditions.append(Product.retail_price <= max_price)
    return conditions


def find_department_id(db: Session, name: str) -> Optional[int]:
    """First department (lowest id) whose name contains ``name``, any case."""
    return db.execute(
        select(Department.id)
        .where(Department.name.icontains(name, autoescape=True))
        .order_by(Department.id)
        .limit(1)
    ).scalar_one_or_none()


def resolve_department_filter(
    value: Optional[str],
    lookup: Optional[DepartmentLookup],
    *,
    strict: bool = False,
) -> Optional[int]:
    department = clean_text(value)
    if department is None:
        return None
    if department.isascii() and department.isdigit():
        digits = department.lstrip("0") or "0"
        if len(digits) > len(str(MAX_STORE_INTEGER)):
            # No stored row can carry this id.
            return MAX_STORE_INTEGER + 1
        return int(digits)
    department_id = lookup(department) if lookup is not None else None
    if department_id is None and strict:
        raise ValidationError("Unknown department: {}".format(department))
    return department_id


def build_product_query(
    query: ProductQuery,
    *,
    default_limit: int,
    max_limit: int,
    department_lookup: Optional[DepartmentLookup] = None,
    scope_department_id: Optional[int] = None,
    strict_department: bool = False,
) -> ProductQueryPlan:
    """Validate ``query`` and build the page/count plan.

    ``scope_department_id`` pins the listing to one department and ignores
    ``query.department``. An unmatched department name drops the filter
    unless ``strict_department`` is set.
    """
    page, limit = parse_pagination(
        query.page,
        query.limit,
        default_limit=default_limit,
        max_limit=max_limit,
    )
    sort_by, sort_order, order_by = resolve_sort(query.sort_by, query.sort_order)
    min_price = parse_price(query.min_price, "minPrice")
    max_price = parse_price(query.max_price, "maxPrice")

    plan = ProductQueryPlan(
        page=page,
        limit=limit,
        offset=compute_offset(page, limit),
        sort_by=sort_by,
        sort_order=sort_order,
        category=clean_text(query.category),
        brand=clean_text(query.brand),
        search=clean_text(query.search),
        min_price=min_price,
        max_price=max_price,
        order_by=order_by,
    )

    if scope_department_id is not None:
        plan.department_id = scope_department_id
    else:
        plan.department_id = resolve_department_filter(
            query.department,
            department_lookup,
            strict=strict_department,
        )

    if plan.department_id is not None:
        if plan.department_id > MAX_STORE_INTEGER:
            plan.conditions.append(false())
        else:
            plan.conditions.append(Product.department_id == plan.department_id)
    plan.conditions.extend(
        text_conditions(category=plan.category, brand=plan.brand, search=plan.search)
    )
    plan.conditions.extend(price_conditions(plan.min_price, plan.max_price))
    return plan


__all__ = [
    "ProductQuery",
    "ProductQueryPlan",
    "build_product_query",
    "find_department_id",
    "resolve_department_filter",
    "resolve_sort",
]
