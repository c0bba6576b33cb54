"""Verify that every failure is rendered as a JSON ``{message}`` body."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path
from unittest import mock

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from pymongo.errors import PyMongoError

from app import create_app
from student_records.config import ConfigError
from student_records.errors import NotFoundError, ServiceError, ValidationError
from student_records.services import StudentService


class ErrorHandlersTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = mock.create_autospec(StudentService, instance=True)
        app = create_app(self.service, url_prefix="/api")
        app.config["TESTING"] = True
        self.client = app.test_client()

    def _list_with_error(self, exc: Exception):
        self.service.list_students.side_effect = exc
        with self.assertLogs("student_records.errors", level="ERROR"):
            return self.client.get("/api/students")

    def test_service_error_keeps_its_code(self) -> None:
        for exc, status in [
            (ServiceError("Teapot", 418), 418),
            (ValidationError("page must be an integer."), 400),
            (NotFoundError("Student not found"), 404),
        ]:
            with self.subTest(status=status):
                self.service.list_students.side_effect = exc

                response = self.client.get("/api/students")

                self.assertEqual(status, response.status_code)
                self.assertEqual({"message": exc.message}, response.get_json())

    def test_service_error_without_code_is_500(self) -> None:
        response = self._list_with_error(ServiceError("Something broke"))

        self.assertEqual(500, response.status_code)
        self.assertEqual({"message": "Something broke"}, response.get_json())

    def test_database_errors_are_503(self) -> None:
        response = self._list_with_error(PyMongoError("connection refused"))

        self.assertEqual(503, response.status_code)
        self.assertEqual(
            {"message": "Database unavailable. Please try again later."},
            response.get_json(),
        )

    def test_missing_configuration_is_500(self) -> None:
        response = self._list_with_error(ConfigError("MONGODB_URI is not set."))

        self.assertEqual(500, response.status_code)
        self.assertEqual({"message": "MONGODB_URI is not set."}, response.get_json())

    def test_unexpected_errors_are_500(self) -> None:
        response = self._list_with_error(RuntimeError("secret detail"))

        self.assertEqual(500, response.status_code)
        self.assertEqual({"message": "Internal server error"}, response.get_json())

    def test_unknown_route_and_method(self) -> None:
        response = self.client.get("/api/nothing-here")
        self.assertEqual(404, response.status_code)
        self.assertIn("message", response.get_json())

        response = self.client.delete("/api/students/1")
        self.assertEqual(405, response.status_code)
        self.assertIn("message", response.get_json())

    def test_create_app_configures_logging(self) -> None:
        with mock.patch("app.configure_logging") as configure_logging:
            create_app(self.service)

        configure_logging.assert_called_once_with()

    def test_health(self) -> None:
        response = self.client.get("/api/health")

        self.assertEqual(200, response.status_code)
        self.assertEqual({"ok": True}, response.get_json())


if __name__ == "__main__":
    unittest.main()
