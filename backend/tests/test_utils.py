"""Tests for request parsing helpers."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from pymongo import ASCENDING, DESCENDING

from student_records.config import _db_name_from_uri
from student_records.errors import ValidationError
from student_records.utils.paging import PagingParamError, parse_paging_params
from student_records.utils.validation import is_missing, parse_student_id


class ParseStudentIdTestCase(unittest.TestCase):
    def test_valid_integers(self) -> None:
        for raw, expected in [
            ("7", 7),
            (" 42 ", 42),
            ("-3", -3),
            ("+5", 5),
            ("007", 7),
            (str(2**63 - 1), 2**63 - 1),
        ]:
            with self.subTest(raw=raw):
                self.assertEqual(expected, parse_student_id(raw))

    def test_invalid_values(self) -> None:
        for raw in ["", "   ", None, "abc", "1.0", "12abc", "1e3", "-", "٣"]:
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError) as ctx:
                    parse_student_id(raw)
                self.assertEqual("Invalid student ID", ctx.exception.message)
                self.assertEqual(400, ctx.exception.status_code)

    def test_out_of_bson_range(self) -> None:
        for raw in [str(2**63), str(-(2**63) - 1), "99999999999999999999"]:
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError) as ctx:
                    parse_student_id(raw)
                self.assertEqual("Invalid student ID", ctx.exception.message)
                self.assertEqual(400, ctx.exception.status_code)


class IsMissingTestCase(unittest.TestCase):
    def test_presence(self) -> None:
        for value in [None, "", "  \t"]:
            with self.subTest(value=value):
                self.assertTrue(is_missing(value))
        for value in [False, 0, "x", [], {}]:
            with self.subTest(value=value):
                self.assertFalse(is_missing(value))


class PagingParamsTestCase(unittest.TestCase):
    FIELDS = {"id": "_id", "name": "name"}

    def test_defaults_disable_pagination(self) -> None:
        params = parse_paging_params({}, allowed_sort_fields=self.FIELDS, default_sort="id")

        self.assertFalse(params.paginate)
        self.assertEqual(("_id", ASCENDING), params.sort)
        self.assertEqual(0, params.skip)
        self.assertEqual(0, params.limit)

    def test_explicit_page(self) -> None:
        params = parse_paging_params(
            {"page": "3", "sort": "-name"},
            allowed_sort_fields=self.FIELDS,
            default_sort="id",
        )

        self.assertTrue(params.paginate)
        self.assertEqual(("name", DESCENDING), params.sort)
        self.assertEqual("-name", params.normalized_sort)
        self.assertEqual(40, params.skip)
        self.assertEqual(20, params.limit)

    def test_invalid_values(self) -> None:
        for args in [{"page": "0"}, {"page_size": "x"}, {"page_size": "101"}, {"sort": "email"}]:
            with self.subTest(args=args):
                with self.assertRaises(PagingParamError):
                    parse_paging_params(
                        args, allowed_sort_fields=self.FIELDS, default_sort="id"
                    )


class DbNameFromUriTestCase(unittest.TestCase):
    def test_extracts_path(self) -> None:
        self.assertEqual(
            "school", _db_name_from_uri("mongodb://localhost:27017/school?retryWrites=true")
        )
        self.assertEqual("", _db_name_from_uri("mongodb://localhost:27017"))
        self.assertEqual("", _db_name_from_uri("mongodb://localhost:27017/"))


if __name__ == "__main__":
    unittest.main()
