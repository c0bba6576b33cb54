from __future__ import annotations

import logging

from flask import Flask, jsonify

from student_records import config
from student_records.errors import register_error_handlers
from student_records.routes import SERVICE_EXTENSION, auth_simple_bp, students_bp
from student_records.services import StudentService, StudentServiceProtocol

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(
    student_service: StudentServiceProtocol | None = None,
    *,
    url_prefix: str | None = None,
) -> Flask:
    """Build the Flask application.

    ``student_service`` defaults to the MongoDB-backed service; tests pass a
    stand-in instead.
    """

    configure_logging()

    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY
    app.config["SESSION_COOKIE_NAME"] = config.SESSION_COOKIE_NAME

    if student_service is None:
        student_service = StudentService()
    app.extensions[SERVICE_EXTENSION] = student_service

    prefix = config.STUDENTS_URL_PREFIX if url_prefix is None else url_prefix
    app.register_blueprint(auth_simple_bp)
    app.register_blueprint(students_bp, url_prefix=prefix or None)
    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return jsonify({"ok": True})

    logger.debug("Student routes mounted at %r", prefix or "/")
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
