"""Move products from embedded department names to ``department_id``.

Run one instance at a time: the migration takes no lock.
"""

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy.exc import SQLAlchemyError

from catalog.core.logging import setup_logging
from catalog.database import Base, SessionLocal, engine
from catalog.services.migration_service import DepartmentMigration


def parse_args():
    parser = argparse.ArgumentParser(
        description="Normalize product departments into the departments table."
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="migrate",
        choices=("migrate", "rollback", "status"),
        help="migrate (default), rollback to department names, or report status.",
    )
    return parser.parse_args()


def print_status(migration: DepartmentMigration) -> bool:
    status = migration.status()
    print("Migration status:")
    print(f"  Total products: {status.total}")
    print(f"  With old 'department' field: {status.with_legacy_department}")
    print(f"  With new 'department_id' field: {status.with_department_id}")
    if status.complete:
        print("Migration completed successfully!")
    else:
        print("Migration incomplete.")
    return status.complete


def main():
    setup_logging()
    args = parse_args()
    Base.metadata.create_all(bind=engine)
    migration = DepartmentMigration(SessionLocal)

    try:
        if args.command == "status":
            print_status(migration)
            return
        if args.command == "rollback":
            restored = migration.rollback()
            for name, count in restored.items():
                print(f"  {name}: {count} restored")
            print(f"Rollback complete, {sum(restored.values())} products restored.")
            return

        report = migration.run()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Migration failed: {exc}") from exc

    if report.creation_skipped:
        print("Departments already exist, creation skipped.")
    else:
        print(f"Created {report.departments_created} departments.")
    for name, count in report.updated_by_department.items():
        print(f"  {name} -> {report.department_map[name]}: {count} products")
    print(f"Updated {report.products_updated} products.")

    verification = report.verification
    print(f"Products without department_id: {verification.without_department_id}")
    print(f"Products with old department field: {verification.with_legacy_department}")
    if not verification.ok:
        raise SystemExit("Migration verification found issues.")
    print("Migration verification successful.")


if __name__ == "__main__":
    main()
