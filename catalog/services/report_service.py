from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from catalog.models.department import Department
from catalog.models.product import Product


@dataclass
class PriceRange:
    minimum: float
    maximum: float
    average: float


@dataclass
class BasicStats:
    total_products: int
    retail_price: Optional[PriceRange] = None
    cost: Optional[PriceRange] = None
    categories: list[str] = field(default_factory=list)
    brands: list[str] = field(default_factory=list)
    departments: list[str] = field(default_factory=list)
    distribution_centers: list[int] = field(default_factory=list)


@dataclass
class GroupBreakdown:
    name: Optional[str]
    count: int
    average_price: float


@dataclass
class IntegrityReport:
    duplicate_ids: int
    duplicate_skus: int
    missing_required_fields: int
    invalid_prices: int

    @property
    def ok(self) -> bool:
        return not (
            self.duplicate_ids
            or self.duplicate_skus
            or self.missing_required_fields
            or self.invalid_prices
        )


def _department_label():
    # Legacy rows carry the name inline; migrated rows go through the join.
    return func.coalesce(Product.department, Department.name)


def _price_range(db: Session, column) -> Optional[PriceRange]:
    row = db.execute(select(func.min(column), func.max(column), func.avg(column))).one()
    if row[0] is None:
        return None
    return PriceRange(minimum=float(row[0]), maximum=float(row[1]), average=float(row[2]))


def _distinct(db: Session, column) -> list:
    values = db.execute(select(column).where(column.is_not(None)).distinct()).scalars().all()
    return sorted(values)


def basic_stats(db: Session) -> BasicStats:
    total = db.execute(select(func.count()).select_from(Product)).scalar_one()
    stats = BasicStats(total_products=total)
    if not total:
        return stats

    label = _department_label()
    stats.retail_price = _price_range(db, Product.retail_price)
    stats.cost = _price_range(db, Product.cost)
    stats.categories = _distinct(db, Product.category)
    stats.brands = _distinct(db, Product.brand)
    stats.distribution_centers = _distinct(db, Product.distribution_center_id)
    stats.departments = sorted(
        name
        for name in db.execute(
            select(label)
            .select_from(Product)
            .outerjoin(Department, Department.id == Product.department_id)
            .distinct()
        ).scalars()
        if name is not None
    )
    return stats


def category_breakdown(db: Session, limit: int = 10) -> list[GroupBreakdown]:
    count = func.count().label("count")
    rows = db.execute(
        select(Product.category, count, func.avg(Product.retail_price))
        .group_by(Product.category)
        .order_by(count.desc(), Product.category)
        .limit(limit)
    ).all()
    return [GroupBreakdown(name=row[0], count=row[1], average_price=float(row[2])) for row in rows]


def department_breakdown(db: Session) -> list[GroupBreakdown]:
    label = _department_label().label("department_name")
    count = func.count().label("count")
    rows = db.execute(
        select(label, count, func.avg(Product.retail_price))
        .select_from(Product)
        .outerjoin(Department, Department.id == Product.department_id)
        .group_by(label)
        .order_by(count.desc(), label)
    ).all()
    return [GroupBreakdown(name=row[0], count=row[1], average_price=float(row[2])) for row in rows]


def sample_products(db: Session, limit: int = 5) -> list[Product]:
    return list(db.execute(select(Product).order_by(Product.id).limit(limit)).scalars().all())


def _duplicate_count(db: Session, column) -> int:
    duplicates = (
        select(column)
        .group_by(column)
        .having(func.count() > 1)
        .subquery()
    )
    return db.execute(select(func.count()).select_from(duplicates)).scalar_one()


def integrity_checks(db: Session) -> IntegrityReport:
    missing = db.execute(
        select(func.count())
        .select_from(Product)
        .where(
            or_(
                Product.name == "",
                Product.category == "",
                Product.brand == "",
                Product.sku == "",
                Product.department == "",
                Product.department.is_(None) & Product.department_id.is_(None),
            )
        )
    ).scalar_one()
    invalid_prices = db.execute(
        select(func.count())
        .select_from(Product)
        .where(or_(Product.retail_price < 0, Product.cost < 0))
    ).scalar_one()
    return IntegrityReport(
        duplicate_ids=_duplicate_count(db, Product.id),
        duplicate_skus=_duplicate_count(db, Product.sku),
        missing_required_fields=missing,
        invalid_prices=invalid_prices,
    )


__all__ = [
    "BasicStats",
    "GroupBreakdown",
    "IntegrityReport",
    "PriceRange",
    "basic_stats",
    "category_breakdown",
    "department_breakdown",
    "integrity_checks",
    "sample_products",
]
