import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running this script directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy import delete, select

from catalog.core.logging import setup_logging
from catalog.database import Base, SessionLocal, engine
from catalog.models.department import Department
from catalog.models.product import Product

SAMPLE_PRODUCTS = (
    # id, sku, name, brand, category, department, cost, retail_price, distribution center
    (13842, "2A3E953A5E3D81E67945BCE5519F84C8", "Low Profile Dyed Cotton Twill Cap - Navy W39S55D",
     "MG", "Accessories", "Women", 2.52, 6.25, 1),
    (13928, "2AB7D3E8F8B7EDB2DBE5D6AE1F2F7DBC", "Ray-Ban RB2132 New Wayfarer Sunglasses",
     "Ray-Ban", "Accessories", "Women", 71.61, 159.0, 2),
    (14115, "8F2F2D4B4F1D9A02E5B0C3E7B4D1C9AA", "Merino Wool Trapper Hat",
     "Columbia", "Accessories", "Men", 18.75, 39.99, 3),
    (28646, "9C2F1A5B7E8D4F3A2B1C0D9E8F7A6B5C", "Classic Crew Neck Tee",
     "Hanes", "Tops & Tees", "Men", 4.1, 9.99, 1),
    (28647, "1B2C3D4E5F6A7B8C9D0E1F2A3B4C5D6E", "Slim Fit Stretch Jeans",
     "Levi's", "Jeans", "Men", 24.3, 59.5, 2),
    (30001, "AA11BB22CC33DD44EE55FF6677889900", "High Rise Skinny Jeans",
     "Levi's", "Jeans", "Women", 22.0, 54.0, 4),
    (30002, "0099887766FFEEDDCCBBAA1122334455", "Wrap Midi Dress",
     "Calvin Klein", "Dresses", "Women", 38.4, 89.0, 5),
    (30003, "5A5B5C5D5E5F6A6B6C6D6E6F7A7B7C7D", "Quilted Puffer Jacket",
     "The North Face", "Outerwear & Coats", "Women", 96.0, 229.0, 3),
)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Seed a sample catalog in the pre-migration shape."
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing products and departments before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(Product))
            db.execute(delete(Department))
            db.commit()

        has_product = db.execute(select(Product.id).limit(1)).first()
        if has_product:
            print("Seed skipped: products already exist.")
            return

        db.add_all(
            Product(
                id=product_id,
                sku=sku,
                name=name,
                brand=brand,
                category=category,
                department=department,
                cost=cost,
                retail_price=retail_price,
                distribution_center_id=distribution_center_id,
            )
            for (
                product_id,
                sku,
                name,
                brand,
                category,
                department,
                cost,
                retail_price,
                distribution_center_id,
            ) in SAMPLE_PRODUCTS
        )
        db.commit()
        print(f"Seeded {len(SAMPLE_PRODUCTS)} products.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
