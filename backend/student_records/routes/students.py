"""Student resource endpoints.

Each handler validates its path and body input, calls exactly one operation on
the configured student service and serializes the result. Failures are raised
and turned into ``{"message": ...}`` responses by the application's error
handlers.
"""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, g, jsonify, request

from ..errors import NotFoundError, ValidationError
from ..services import StudentServiceProtocol
from ..utils.validation import is_missing, parse_student_id

students_bp = Blueprint("students", __name__)

SERVICE_EXTENSION = "student_service"


def get_student_service() -> StudentServiceProtocol:
    return current_app.extensions[SERVICE_EXTENSION]


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    return payload


def _current_reviewer_id():
    user = g.get("current_user")
    return user.get("id") if user else None


@students_bp.get("/students")
def list_students():
    students = get_student_service().list_students(request.args)
    return jsonify({"students": students})


@students_bp.post("/students")
def create_student():
    payload = _json_body()
    if is_missing(payload.get("name")) or is_missing(payload.get("email")):
        raise ValidationError("Name and email are required")

    result = get_student_service().create_student(payload)
    return jsonify(result), 201


@students_bp.put("/students/<student_id>")
def update_student(student_id: str):
    user_id = parse_student_id(student_id)
    update_data = {**_json_body(), "userId": user_id}

    message = get_student_service().update_student(update_data)
    return jsonify({"message": message})


@students_bp.get("/students/<student_id>")
def get_student_detail(student_id: str):
    user_id = parse_student_id(student_id)

    student = get_student_service().get_student_detail(user_id)
    if not student:
        raise NotFoundError("Student not found")
    return jsonify(student)


@students_bp.patch("/students/<student_id>/status")
def set_student_status(student_id: str):
    user_id = parse_student_id(student_id)
    body = _json_body()
    if "status" not in body:
        raise ValidationError("Status is required")
    status = body["status"]

    result = get_student_service().set_student_status(
        {"userId": user_id, "reviewerId": _current_reviewer_id(), "status": status}
    )
    return jsonify(result)


__all__ = ["SERVICE_EXTENSION", "get_student_service", "students_bp"]
