import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy.exc import SQLAlchemyError

from catalog.core.logging import setup_logging
from catalog.database import SessionLocal
from catalog.services.report_service import (
    basic_stats,
    category_breakdown,
    department_breakdown,
    integrity_checks,
    sample_products,
)


def parse_args():
    parser = argparse.ArgumentParser(description="Print catalog statistics and integrity checks.")
    parser.add_argument("--samples", type=int, default=5, help="Sample products to show.")
    return parser.parse_args()


def _preview(values, size=5):
    shown = ", ".join(str(value) for value in values[:size])
    return shown + ("..." if len(values) > size else "")


def print_basic_stats(db) -> bool:
    stats = basic_stats(db)
    print("\nBasic statistics:")
    print(f"  Total products: {stats.total_products:,}")
    if not stats.total_products:
        print("  No products found in database!")
        return False
    price, cost = stats.retail_price, stats.cost
    print(f"  Price range: ${price.minimum:.2f} - ${price.maximum:.2f} (avg ${price.average:.2f})")
    print(f"  Cost range: ${cost.minimum:.2f} - ${cost.maximum:.2f} (avg ${cost.average:.2f})")
    print(f"  Unique categories: {len(stats.categories)} ({_preview(stats.categories)})")
    print(f"  Unique departments: {len(stats.departments)} ({', '.join(stats.departments)})")
    print(f"  Unique brands: {len(stats.brands)} ({_preview(stats.brands)})")
    print(
        f"  Distribution centers: {len(stats.distribution_centers)} "
        f"({_preview(stats.distribution_centers, size=len(stats.distribution_centers))})"
    )
    return True


def print_breakdowns(db) -> None:
    print("\nCategory breakdown:")
    for index, group in enumerate(category_breakdown(db), start=1):
        print(f"  {index}. {group.name}: {group.count:,} products (avg ${group.average_price:.2f})")

    print("\nDepartment breakdown:")
    for index, group in enumerate(department_breakdown(db), start=1):
        print(f"  {index}. {group.name}: {group.count:,} products (avg ${group.average_price:.2f})")


def print_samples(db, limit: int) -> None:
    print("\nSample products:")
    for index, product in enumerate(sample_products(db, limit), start=1):
        ref = product.department_ref
        print(f"  {index}. ID: {product.id} | {product.name}")
        print(f"     Category: {product.category} | Department: {ref}")
        print(f"     Brand: {product.brand} | Price: ${product.retail_price} | SKU: {product.sku}")


def print_integrity(db) -> bool:
    report = integrity_checks(db)
    print("\nData integrity checks:")
    print(f"  Duplicate product IDs: {report.duplicate_ids}")
    print(f"  Duplicate SKUs: {report.duplicate_skus}")
    print(f"  Missing required fields: {report.missing_required_fields}")
    print(f"  Invalid prices: {report.invalid_prices}")
    return report.ok


def main():
    setup_logging()
    args = parse_args()
    db = SessionLocal()
    try:
        if not print_basic_stats(db):
            raise SystemExit(1)
        print_breakdowns(db)
        print_samples(db, args.samples)
        if not print_integrity(db):
            raise SystemExit("Data verification found integrity issues.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Verification failed: {exc}") from exc
    finally:
        db.close()
    print("\nData verification completed.")


if __name__ == "__main__":
    main()
