import unittest

from catalog.core.constants import MAX_STORE_INTEGER
from catalog.core.errors import InvalidPagination
from catalog.services.pagination import (
    build_pagination,
    compute_offset,
    parse_pagination,
    total_pages,
)


class PaginationEnvelopeTest(unittest.TestCase):
    def test_total_pages_rounds_up(self):
        self.assertEqual(total_pages(0, 20), 0)
        self.assertEqual(total_pages(20, 20), 1)
        self.assertEqual(total_pages(21, 20), 2)
        self.assertEqual(total_pages(101, 5), 21)

    def test_middle_page_has_both_neighbours(self):
        pagination = build_pagination(total_count=45, page=2, limit=20)
        self.assertEqual(pagination.total_pages, 3)
        self.assertTrue(pagination.has_next_page)
        self.assertTrue(pagination.has_prev_page)

    def test_last_page_has_no_next(self):
        pagination = build_pagination(total_count=45, page=3, limit=20)
        self.assertFalse(pagination.has_next_page)
        self.assertTrue(pagination.has_prev_page)

    def test_empty_result(self):
        pagination = build_pagination(total_count=0, page=1, limit=20)
        self.assertEqual(pagination.total_pages, 0)
        self.assertFalse(pagination.has_next_page)
        self.assertFalse(pagination.has_prev_page)

    def test_serializes_with_camel_case_keys(self):
        payload = build_pagination(total_count=7, page=1, limit=5).model_dump(by_alias=True)
        self.assertEqual(
            payload,
            {
                "currentPage": 1,
                "totalPages": 2,
                "totalCount": 7,
                "limit": 5,
                "hasNextPage": True,
                "hasPrevPage": False,
            },
        )


class ParsePaginationTest(unittest.TestCase):
    def test_blank_values_fall_back_to_defaults(self):
        self.assertEqual(parse_pagination(None, "", default_limit=12, max_limit=100), (1, 12))

    def test_integer_strings(self):
        self.assertEqual(parse_pagination(" 2 ", "50", default_limit=20, max_limit=100), (2, 50))

    def test_rejects_fractional_values(self):
        with self.assertRaises(InvalidPagination):
            parse_pagination("1.5", "10", default_limit=20, max_limit=100)

    def test_huge_page_is_accepted_with_bounded_offset(self):
        page, limit = parse_pagination("9999999999999999999", "20", default_limit=20, max_limit=100)
        self.assertEqual(page, 9999999999999999999)
        self.assertEqual(compute_offset(page, limit), MAX_STORE_INTEGER)

    def test_respects_configured_maximum(self):
        with self.assertRaises(InvalidPagination):
            parse_pagination("1", "60", default_limit=20, max_limit=50)


if __name__ == "__main__":
    unittest.main()
