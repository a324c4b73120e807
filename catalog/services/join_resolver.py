from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.models.department import Department
from catalog.models.product import Product
from catalog.schemas.department import DepartmentRead
from catalog.schemas.product import ProductRead, ProductWithDepartment


def load_departments(db: Session, department_ids: Iterable[Optional[int]]) -> dict[int, Department]:
    """Fetch every referenced department in one query, keyed by id."""
    wanted = {department_id for department_id in department_ids if department_id is not None}
    if not wanted:
        return {}
    rows = db.execute(select(Department).where(Department.id.in_(wanted))).scalars().all()
    return {department.id: department for department in rows}


def to_product_payload(
    product: Product,
    department: Optional[Department],
) -> ProductWithDepartment:
    # Read the columns first: ``Product.department`` is the legacy string.
    base = ProductRead.model_validate(product).model_dump()
    return ProductWithDepartment(
        **base,
        department=DepartmentRead.model_validate(department) if department is not None else None,
    )


def attach_departments(db: Session, products: list[Product]) -> list[ProductWithDepartment]:
    """Attach each product's department; dangling ids resolve to ``None``."""
    departments = load_departments(db, (product.department_id for product in products))
    return [
        to_product_payload(product, departments.get(product.department_id))
        for product in products
    ]


def attach_department(
    products: list[Product],
    department: Department,
) -> list[ProductWithDepartment]:
    return [to_product_payload(product, department) for product in products]


__all__ = [
    "attach_department",
    "attach_departments",
    "load_departments",
    "to_product_payload",
]
