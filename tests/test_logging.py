import json
import logging
import unittest

from catalog.core.logging import JsonFormatter, request_context


class JsonFormatterTest(unittest.TestCase):
    def _record(self, **extra):
        record = logging.LogRecord(
            name="catalog.main",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="Store error: %s",
            args=("database is locked",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_request_fields_are_included(self):
        record = self._record(**request_context("GET", "/api/brands", 500))
        payload = json.loads(JsonFormatter("Catalog").format(record))
        self.assertEqual(payload["app"], "Catalog")
        self.assertEqual(payload["message"], "Store error: database is locked")
        self.assertEqual(payload["path"], "/api/brands")
        self.assertEqual(payload["method"], "GET")
        self.assertEqual(payload["status_code"], 500)

    def test_plain_record_has_no_request_fields(self):
        payload = json.loads(JsonFormatter("Catalog").format(self._record()))
        self.assertNotIn("path", payload)
        self.assertEqual(payload["level"], "ERROR")


if __name__ == "__main__":
    unittest.main()
