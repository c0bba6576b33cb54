"""Application route blueprints and helpers."""

from .auth_simple import auth_simple_bp
from .students import SERVICE_EXTENSION, get_student_service, students_bp

__all__ = ["SERVICE_EXTENSION", "auth_simple_bp", "get_student_service", "students_bp"]
