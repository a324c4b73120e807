"""One-time move from embedded department names to ``department_id``.

States run ``NOT_STARTED -> DEPARTMENTS_CREATED -> PRODUCTS_UPDATED ->
VERIFIED``; ``rollback`` moves products back to the legacy name and ends in
``ROLLED_BACK``. Each step is idempotent, so a run interrupted by a store
error is recovered by running it again.

Operational constraint: only one migration process may run at a time. The
department-creation guard and the per-department updates take no lock, so
concurrent runs can race on department ids.

Store errors are not wrapped here. This is an operator-run batch job and the
full error should reach the operator.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, sessionmaker

from catalog.core.constants import DEPARTMENT_DESCRIPTION_TEMPLATE
from catalog.models.department import Department
from catalog.models.product import Product

logger = logging.getLogger(__name__)


class MigrationState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    DEPARTMENTS_CREATED = "DEPARTMENTS_CREATED"
    PRODUCTS_UPDATED = "PRODUCTS_UPDATED"
    VERIFIED = "VERIFIED"
    ROLLED_BACK = "ROLLED_BACK"


@dataclass
class VerificationResult:
    without_department_id: int
    with_legacy_department: int

    @property
    def ok(self) -> bool:
        return self.without_department_id == 0 and self.with_legacy_department == 0


@dataclass
class MigrationReport:
    state: MigrationState = MigrationState.NOT_STARTED
    department_names: list[str] = field(default_factory=list)
    departments_created: int = 0
    creation_skipped: bool = False
    department_map: dict[str, int] = field(default_factory=dict)
    updated_by_department: dict[str, int] = field(default_factory=dict)
    verification: Optional[VerificationResult] = None

    @property
    def products_updated(self) -> int:
        return sum(self.updated_by_department.values())


@dataclass
class MigrationStatus:
    total: int
    with_legacy_department: int
    with_department_id: int

    @property
    def complete(self) -> bool:
        return self.with_legacy_department == 0 and self.with_department_id == self.total


def department_description(name: str) -> str:
    return DEPARTMENT_DESCRIPTION_TEMPLATE.format(name=name)


def derive_department_names(db: Session) -> list[str]:
    """Distinct legacy names, sorted so assigned ids are deterministic."""
    names = db.execute(
        select(Product.department).where(Product.department.is_not(None)).distinct()
    ).scalars().all()
    return sorted(names)


def create_departments(db: Session, names: list[str]) -> int:
    """Insert departments ``1..n`` unless any department already exists."""
    existing = db.execute(select(func.count()).select_from(Department)).scalar_one()
    if existing:
        logger.warning(
            "Found %d existing departments. Skipping department creation.", existing
        )
        return 0

    db.add_all(
        Department(
            id=index + 1,
            name=name,
            description=department_description(name),
            is_active=True,
        )
        for index, name in enumerate(names)
    )
    db.commit()
    logger.info("Created %d department records", len(names))
    return len(names)


def load_department_map(db: Session) -> dict[str, int]:
    rows = db.execute(select(Department.name, Department.id).order_by(Department.id)).all()
    return {name: department_id for name, department_id in rows}


def rewrite_products(db: Session, department_map: dict[str, int]) -> dict[str, int]:
    """Swap the legacy name for ``department_id``, one UPDATE per department."""
    updated = {}
    for name, department_id in department_map.items():
        result = db.execute(
            update(Product)
            .where(Product.department == name)
            .values(department_id=department_id, department=None)
        )
        db.commit()
        updated[name] = result.rowcount
        logger.info("Updated %d products for department: %s", result.rowcount, name)
    return updated


def verify_migration(db: Session) -> VerificationResult:
    without_id = db.execute(
        select(func.count()).select_from(Product).where(Product.department_id.is_(None))
    ).scalar_one()
    with_legacy = db.execute(
        select(func.count()).select_from(Product).where(Product.department.is_not(None))
    ).scalar_one()
    return VerificationResult(
        without_department_id=without_id,
        with_legacy_department=with_legacy,
    )


def migration_status(db: Session) -> MigrationStatus:
    total = db.execute(select(func.count()).select_from(Product)).scalar_one()
    with_legacy = db.execute(
        select(func.count()).select_from(Product).where(Product.department.is_not(None))
    ).scalar_one()
    with_id = db.execute(
        select(func.count()).select_from(Product).where(Product.department_id.is_not(None))
    ).scalar_one()
    return MigrationStatus(
        total=total,
        with_legacy_department=with_legacy,
        with_department_id=with_id,
    )


class DepartmentMigration:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self.state = MigrationState.NOT_STARTED

    def run(self) -> MigrationReport:
        report = MigrationReport()
        db = self._session_factory()
        try:
            logger.info("Starting department migration")
            report.department_names = derive_department_names(db)
            logger.info(
                "Found %d unique departments: %s",
                len(report.department_names),
                ", ".join(report.department_names),
            )

            report.departments_created = create_departments(db, report.department_names)
            report.creation_skipped = report.departments_created == 0 and bool(
                report.department_names
            )
            self._advance(report, MigrationState.DEPARTMENTS_CREATED)

            report.department_map = load_department_map(db)
            report.updated_by_department = rewrite_products(db, report.department_map)
            self._advance(report, MigrationState.PRODUCTS_UPDATED)
            logger.info("Migration updated %d products", report.products_updated)

            report.verification = verify_migration(db)
            if report.verification.ok:
                self._advance(report, MigrationState.VERIFIED)
                logger.info("Migration verification successful")
            else:
                logger.warning(
                    "Migration verification found issues: %d without department_id, "
                    "%d with legacy department",
                    report.verification.without_department_id,
                    report.verification.with_legacy_department,
                )
        except Exception:
            db.rollback()
            logger.error("Department migration failed in state %s", self.state.value)
            raise
        finally:
            db.close()
        return report

    def rollback(self) -> dict[str, int]:
        """Restore legacy names on products. Departments are kept."""
        restored = {}
        db = self._session_factory()
        try:
            logger.info("Rolling back department migration")
            for name, department_id in load_department_map(db).items():
                result = db.execute(
                    update(Product)
                    .where(Product.department_id == department_id)
                    .values(department=name, department_id=None)
                )
                db.commit()
                restored[name] = result.rowcount
                logger.info("Restored %d products for department: %s", result.rowcount, name)
        except Exception:
            db.rollback()
            logger.error("Department rollback failed")
            raise
        finally:
            db.close()
        self.state = MigrationState.ROLLED_BACK
        return restored

    def status(self) -> MigrationStatus:
        db = self._session_factory()
        try:
            return migration_status(db)
        finally:
            db.close()

    def _advance(self, report: MigrationReport, state: MigrationState) -> None:
        self.state = state
        report.state = state


__all__ = [
    "DepartmentMigration",
    "MigrationReport",
    "MigrationState",
    "MigrationStatus",
    "VerificationResult",
    "create_departments",
    "derive_department_names",
    "load_department_map",
    "migration_status",
    "rewrite_products",
    "verify_migration",
]
