import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import time
import unittest
from unittest.mock import create_autospec

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from catalog.core.errors import StoreError
from catalog.dependencies import get_store
from catalog.main import app
from catalog.services.store import CatalogStore

from catalog_fixtures import DEPARTMENT_IDS, TempCatalogDatabase, add_product, seed_migrated_catalog


def _untouchable_store():
    store = create_autospec(CatalogStore, instance=True)
    store.run.side_effect = AssertionError("store must not be queried")
    store.gather.side_effect = AssertionError("store must not be queried")
    return store


class CatalogApiTest(unittest.TestCase):
    def setUp(self):
        self.database = TempCatalogDatabase()
        seed_migrated_catalog(self.database.Session)
        store = self.database.store()
        app.dependency_overrides[get_store] = lambda: store
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.database.close()

    def _use_store(self, store):
        app.dependency_overrides[get_store] = lambda: store

    def test_filtered_listing_example(self):
        response = self.client.get(
            "/api/products",
            params={
                "category": "Accessories",
                "minPrice": "10",
                "maxPrice": "50",
                "page": "1",
                "limit": "5",
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertLessEqual(len(body["data"]), 5)
        for product in body["data"]:
            self.assertIn("accessories", product["category"].lower())
            self.assertGreaterEqual(product["retail_price"], 10)
            self.assertLessEqual(product["retail_price"], 50)
        self.assertEqual(
            body["pagination"],
            {
                "currentPage": 1,
                "totalPages": 1,
                "totalCount": 3,
                "limit": 5,
                "hasNextPage": False,
                "hasPrevPage": False,
            },
        )

    def test_product_payload_shape(self):
        response = self.client.get("/api/products", params={"limit": "1"})
        product = response.json()["data"][0]
        self.assertEqual(
            set(product),
            {
                "id",
                "sku",
                "name",
                "brand",
                "category",
                "cost",
                "retail_price",
                "department_id",
                "distribution_center_id",
                "createdAt",
                "updatedAt",
                "department",
            },
        )
        self.assertEqual(product["department"]["id"], product["department_id"])
        self.assertIn("isActive", product["department"])
        self.assertEqual(response.json()["pagination"]["limit"], 1)

    def test_default_limit_is_twenty(self):
        body = self.client.get("/api/products").json()
        self.assertEqual(body["pagination"]["limit"], 20)

    def test_invalid_pagination_is_rejected_before_the_store(self):
        self._use_store(_untouchable_store())
        for params in ({"page": "0"}, {"limit": "0"}, {"limit": "101"}, {"page": "x"}):
            with self.subTest(params=params):
                response = self.client.get("/api/products", params=params)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(),
                    {"success": False, "error": "Invalid pagination parameters"},
                )

    def test_unknown_sort_field(self):
        response = self.client.get("/api/products", params={"sortBy": "secret"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid sort field: secret")

    def test_product_detail(self):
        response = self.client.get("/api/products/7")
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["name"], "Wrap Dress")
        self.assertEqual(data["department"]["name"], "Women")

    def test_product_detail_errors(self):
        response = self.client.get("/api/products/12x")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid product ID format")

        response = self.client.get("/api/products/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Product with ID 999 not found"},
        )

    def test_dangling_department_serializes_as_null(self):
        add_product(
            self.database.Session,
            (11, "SKU-011", "Orphan Socks", "Hanes", "Socks", "Men", 1.0, 3.0),
            migrated=True,
            department_id=42,
        )
        response = self.client.get("/api/products/11")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["data"]["department"])

    def test_departments(self):
        body = self.client.get("/api/departments").json()
        self.assertTrue(body["success"])
        self.assertEqual([d["name"] for d in body["data"]], ["Men", "Women"])
        self.assertTrue(all(d["isActive"] for d in body["data"]))

    def test_department_detail(self):
        response = self.client.get(f"/api/departments/{DEPARTMENT_IDS['Men']}")
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["name"], "Men")
        self.assertEqual(data["productCount"], 5)

    def test_missing_department(self):
        response = self.client.get("/api/departments/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "error": "Department not found"})

    def test_non_numeric_department_id_skips_the_store(self):
        self._use_store(_untouchable_store())
        for path in ("/api/departments/abc", "/api/departments/abc/products"):
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "Invalid department ID")

    def test_department_products(self):
        response = self.client.get(
            f"/api/departments/{DEPARTMENT_IDS['Women']}/products",
            params={"search": "jeans", "sortOrder": "desc"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([p["id"] for p in body["data"]], [6])
        self.assertEqual(body["department"]["name"], "Women")
        self.assertEqual(body["pagination"]["limit"], 12)
        self.assertEqual(
            body["filters"],
            {
                "category": None,
                "brand": None,
                "minPrice": None,
                "maxPrice": None,
                "search": "jeans",
                "sortBy": "id",
                "sortOrder": "desc",
            },
        )

    def test_department_products_for_missing_department(self):
        response = self.client.get("/api/departments/999/products")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Department not found")

    def test_facets(self):
        categories = self.client.get("/api/categories").json()
        self.assertEqual(categories["data"], sorted(categories["data"]))
        self.assertIn("Jeans", categories["data"])
        brands = self.client.get("/api/brands").json()
        self.assertIn("Levi's", brands["data"])
        self.assertEqual(len(brands["data"]), len(set(brands["data"])))

    def test_unknown_route(self):
        response = self.client.get("/api/unknown")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "error": "Route not found"})

    def test_store_failure_is_generic(self):
        store = create_autospec(CatalogStore, instance=True)
        store.run.side_effect = StoreError("connection refused by db-primary:5432")
        self._use_store(store)

        response = self.client.get("/api/brands")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "error": "Internal server error"})
        self.assertNotIn("db-primary", response.text)

    def test_out_of_range_ids_are_not_found(self):
        response = self.client.get("/api/products/99999999999999999999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Product with ID 99999999999999999999 not found"},
        )
        for path in (
            "/api/departments/99999999999999999999",
            "/api/departments/99999999999999999999/products",
        ):
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 404)
                self.assertEqual(response.json()["error"], "Department not found")

    def test_page_beyond_store_range_returns_empty_page(self):
        response = self.client.get("/api/products", params={"page": "9999999999999999999"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["data"], [])
        self.assertEqual(body["pagination"]["totalCount"], 10)
        self.assertFalse(body["pagination"]["hasNextPage"])

    def test_non_ascii_digit_department_is_an_unmatched_name(self):
        response = self.client.get("/api/products", params={"department": "\u00b2"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["pagination"]["totalCount"], 10)

    def test_non_finite_price_is_rejected(self):
        for value in ("nan", "inf"):
            with self.subTest(value=value):
                response = self.client.get("/api/products", params={"minPrice": value})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "minPrice must be a number")

    def test_query_deadline_is_a_generic_500(self):
        def slow_session():
            time.sleep(0.5)
            raise OperationalError("connect", {}, Exception("connection timed out"))

        store = CatalogStore(slow_session, timeout_seconds=0.05)
        self.addCleanup(store.close)
        self._use_store(store)

        response = self.client.get("/api/products")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "error": "Internal server error"})

    def test_root_lists_endpoints(self):
        body = self.client.get("/").json()
        self.assertTrue(body["success"])
        self.assertIn("GET /api/products", body["endpoints"])

    def test_health(self):
        body = self.client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")

    def test_health_reports_unavailable_store(self):
        store = create_autospec(CatalogStore, instance=True)
        store.ping.return_value = False
        self._use_store(store)

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["database"], "unavailable")


if __name__ == "__main__":
    unittest.main()
