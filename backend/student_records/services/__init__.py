"""Service boundary used by the HTTP handlers."""

from .students import StudentService, StudentServiceProtocol

__all__ = ["StudentService", "StudentServiceProtocol"]
