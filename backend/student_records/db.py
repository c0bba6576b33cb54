"""MongoDB helpers for the student records service."""

from datetime import datetime

from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection

from .config import get_db_name, get_mongo_uri

_MONGO_CLIENT = None
_MONGO_DB = None


def _get_client():
    """Create (or reuse) a MongoDB client using the configured URI."""

    global _MONGO_CLIENT

    if _MONGO_CLIENT is None:
        _MONGO_CLIENT = MongoClient(get_mongo_uri(), serverSelectionTimeoutMS=5000)
    return _MONGO_CLIENT


def get_db():
    """Return the application's MongoDB database instance."""

    global _MONGO_DB

    if _MONGO_DB is None:
        _MONGO_DB = _get_client()[get_db_name()]
    return _MONGO_DB


_students_indexes_created = False


def _ensure_students_indexes(collection: Collection) -> None:
    global _students_indexes_created
    if _students_indexes_created:
        return

    collection.create_index("email", unique=True, name="unique_email")
    collection.create_index(
        [("name", ASCENDING)],
        name="name_asc",
        background=True,
    )
    collection.create_index(
        [("is_active", ASCENDING)],
        name="is_active_idx",
        background=True,
    )
    _students_indexes_created = True


def get_students_collection() -> Collection:
    """Return the collection that stores student documents."""

    collection = get_db()["students"]
    _ensure_students_indexes(collection)
    return collection


def get_counters_collection() -> Collection:
    """Return the collection holding named integer sequences."""

    return get_db()["counters"]


def next_sequence(counters: Collection, name: str) -> int:
    """Atomically increment and return the sequence called ``name``."""

    document = counters.find_one_and_update(
        {"_id": name},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(document["value"])


def _json_value(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_student(document):
    """Convert a MongoDB student document into a JSON-serialisable dict.

    The integer ``_id`` is exposed as ``id``; every other stored field is
    passed through, with datetimes rendered as ISO-8601 strings.
    """

    student = {
        "id": document.get("_id"),
        "name": document.get("name"),
        "email": document.get("email"),
        "is_active": bool(document.get("is_active", False)),
    }

    for key, value in document.items():
        if key == "_id" or key in student:
            continue
        student[key] = _json_value(value)

    return student


__all__ = [
    "get_counters_collection",
    "get_db",
    "get_students_collection",
    "next_sequence",
    "serialize_student",
]
