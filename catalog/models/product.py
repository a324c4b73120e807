from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Index, Integer, String

from catalog.database.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LegacyName:
    """Pre-migration department reference: the embedded name."""

    name: str


@dataclass(frozen=True)
class NormalizedId:
    """Post-migration department reference: ``departments.id``."""

    id: int


DepartmentRef = Union[LegacyName, NormalizedId]


class Product(Base):
    __tablename__ = "products"

    # External identifier supplied by ingestion.
    id = Column(Integer, primary_key=True, autoincrement=False)
    sku = Column(String, nullable=False, unique=True)

    name = Column(String, nullable=False)
    brand = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, index=True)

    cost = Column(Float, nullable=False)
    retail_price = Column(Float, nullable=False)

    # Exactly one of these is set, see ck_products_department_ref.
    department = Column(String)
    department_id = Column(Integer, index=True)

    distribution_center_id = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint(
            "(department IS NULL) <> (department_id IS NULL)",
            name="ck_products_department_ref",
        ),
        CheckConstraint("cost >= 0", name="ck_products_cost_non_negative"),
        CheckConstraint("retail_price >= 0", name="ck_products_retail_price_non_negative"),
        Index("idx_products_category_department", "category", "department_id"),
        Index("idx_products_brand_category", "brand", "category"),
        Index("idx_products_retail_price", "retail_price"),
    )

    @property
    def department_ref(self) -> DepartmentRef:
        if self.department_id is not None:
            return NormalizedId(self.department_id)
        return LegacyName(self.department)


__all__ = ["DepartmentRef", "LegacyName", "NormalizedId", "Product"]
