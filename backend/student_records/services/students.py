"""Student data access and business rules."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Protocol

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..db import (
    get_counters_collection,
    get_students_collection,
    next_sequence,
    serialize_student,
)
from ..errors import ConflictError, NotFoundError, ValidationError
from ..utils.paging import PagingParamError, parse_paging_params
from ..utils.validation import is_missing

logger = logging.getLogger(__name__)

STUDENT_SEQUENCE = "students"

# Fields managed by the service; clients cannot write them through update.
RESERVED_FIELDS = frozenset(
    {
        "_id",
        "id",
        "userId",
        "is_active",
        "created_at",
        "updated_at",
        "status_reviewer_id",
        "status_updated_at",
    }
)

SORT_FIELDS = {"id": "_id", "name": "name", "email": "email"}

_TRUE_VALUES = {"true", "1", "active"}
_FALSE_VALUES = {"false", "0", "inactive"}


class StudentServiceProtocol(Protocol):
    """Operations the HTTP handlers call into."""

    def list_students(self, args: Mapping[str, str]) -> List[Dict[str, Any]]: ...

    def create_student(self, payload: Mapping[str, Any]) -> Dict[str, Any]: ...

    def get_student_detail(self, user_id: int) -> Dict[str, Any] | None: ...

    def update_student(self, payload: Mapping[str, Any]) -> str: ...

    def set_student_status(self, payload: Mapping[str, Any]) -> Dict[str, Any]: ...


def parse_status(value: Any) -> bool:
    """Coerce a boolean-like status value, raising ValidationError otherwise."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValidationError("Status must be a boolean value.")


def _check_field_names(fields: Mapping[str, Any]) -> None:
    for key in fields:
        if key.startswith("$") or "." in key:
            raise ValidationError(f"Invalid field name: {key}")


def _clean_email(value: Any) -> str:
    email = str(value).strip().lower()
    if "@" not in email or "." not in email.split("@")[-1]:
        raise ValidationError("Enter a valid email address.")
    return email


def _clean_name(value: Any) -> str:
    if is_missing(value):
        raise ValidationError("Name cannot be empty.")
    return str(value).strip()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StudentService:
    """MongoDB implementation of :class:`StudentServiceProtocol`."""

    def __init__(
        self,
        students: Callable[[], Collection] = get_students_collection,
        counters: Callable[[], Collection] = get_counters_collection,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._students = students
        self._counters = counters
        self._clock = clock

    def list_students(self, args: Mapping[str, str]) -> List[Dict[str, Any]]:
        try:
            paging = parse_paging_params(
                args,
                allowed_sort_fields=SORT_FIELDS,
                default_sort="id",
            )
        except PagingParamError as exc:
            raise ValidationError(str(exc)) from None

        filters: Dict[str, Any] = {}

        query = str(args.get("q") or "").strip()
        if query:
            pattern = re.escape(query)
            filters["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"email": {"$regex": pattern, "$options": "i"}},
            ]

        status_raw = args.get("status")
        if not is_missing(status_raw):
            filters["is_active"] = parse_status(status_raw)

        cursor = (
            self._students()
            .find(filters)
            .sort([paging.sort])
            .skip(paging.skip)
            .limit(paging.limit)
        )
        return [serialize_student(doc) for doc in cursor]

    def create_student(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        document = {
            key: value for key, value in payload.items() if key not in RESERVED_FIELDS
        }
        _check_field_names(document)
        document["name"] = _clean_name(payload.get("name"))
        document["email"] = _clean_email(payload.get("email"))

        now = self._clock()
        document["is_active"] = True
        document["created_at"] = now
        document["updated_at"] = now
        document["_id"] = next_sequence(self._counters(), STUDENT_SEQUENCE)

        try:
            self._students().insert_one(document)
        except DuplicateKeyError:
            logger.info("Rejected duplicate student email %s", document["email"])
            raise ConflictError("A student with this email already exists.") from None

        logger.info("Created student %s", document["_id"])
        return {
            "message": "Student added successfully",
            "student": serialize_student(document),
        }

    def get_student_detail(self, user_id: int) -> Dict[str, Any] | None:
        document = self._students().find_one({"_id": user_id})
        if document is None:
            return None
        return serialize_student(document)

    def update_student(self, payload: Mapping[str, Any]) -> str:
        user_id = payload["userId"]
        changes = {
            key: value for key, value in payload.items() if key not in RESERVED_FIELDS
        }
        _check_field_names(changes)

        if not changes:
            raise ValidationError("No changes supplied.")
        if "name" in changes:
            changes["name"] = _clean_name(changes["name"])
        if "email" in changes:
            if is_missing(changes["email"]):
                raise ValidationError("Email cannot be empty.")
            changes["email"] = _clean_email(changes["email"])

        changes["updated_at"] = self._clock()

        try:
            result = self._students().update_one({"_id": user_id}, {"$set": changes})
        except DuplicateKeyError:
            raise ConflictError("A student with this email already exists.") from None

        if result.matched_count == 0:
            raise NotFoundError("Student not found")

        logger.info("Updated student %s", user_id)
        return "Student updated successfully"

    def set_student_status(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        user_id = payload["userId"]
        is_active = parse_status(payload.get("status"))
        reviewer_id = payload.get("reviewerId")

        now = self._clock()
        result = self._students().update_one(
            {"_id": user_id},
            {
                "$set": {
                    "is_active": is_active,
                    "status_reviewer_id": reviewer_id,
                    "status_updated_at": now,
                    "updated_at": now,
                }
            },
        )
        if result.matched_count == 0:
            raise NotFoundError("Student not found")

        logger.info(
            "Student %s marked %s by reviewer %s",
            user_id,
            "active" if is_active else "inactive",
            reviewer_id,
        )
        return {
            "message": "Student status updated successfully",
            "userId": user_id,
            "status": is_active,
        }


__all__ = [
    "RESERVED_FIELDS",
    "StudentService",
    "StudentServiceProtocol",
    "parse_status",
]
