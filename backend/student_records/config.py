"""Application configuration helpers."""

import os

from dotenv import load_dotenv

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DOTENV_PATH = os.path.join(_BASE_DIR, ".env")

if os.path.exists(_DOTENV_PATH):
    load_dotenv(_DOTENV_PATH)


class ConfigError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "student_records_session")

ADMIN_USER = os.getenv("ADMIN_USER", "admin")
ADMIN_PASS = os.getenv("ADMIN_PASS", "admin")
# Opaque identifier recorded as the reviewer of status changes.
ADMIN_ID = os.getenv("ADMIN_ID", "1")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
STUDENTS_URL_PREFIX = os.getenv("STUDENTS_URL_PREFIX", "/api")

_MONGO_URI_CACHE = None
_DB_NAME_CACHE = None


def get_mongo_uri():
    """Return the MongoDB connection string from the environment."""

    global _MONGO_URI_CACHE

    if _MONGO_URI_CACHE:
        return _MONGO_URI_CACHE

    uri = os.getenv("MONGODB_URI")
    if not uri:
        raise ConfigError("MONGODB_URI is not set. Define it in backend/.env.")

    _MONGO_URI_CACHE = uri
    return uri


def _db_name_from_uri(uri: str) -> str:
    main = uri.split("?", 1)[0].rstrip("/")
    after_scheme = main.split("://", 1)[1] if "://" in main else main

    if "/" not in after_scheme:
        return ""
    return after_scheme.split("/", 1)[1]


def get_db_name():
    """Return the database name from MONGODB_DB or the MongoDB URI path."""

    global _DB_NAME_CACHE

    if _DB_NAME_CACHE:
        return _DB_NAME_CACHE

    db_name = os.getenv("MONGODB_DB") or _db_name_from_uri(get_mongo_uri())
    if not db_name:
        raise ConfigError(
            "Database name not found. Provide it via MONGODB_URI or MONGODB_DB."
        )

    _DB_NAME_CACHE = db_name
    return db_name


def reset_cache() -> None:
    """Forget cached connection settings so the environment is re-read."""

    global _MONGO_URI_CACHE, _DB_NAME_CACHE
    _MONGO_URI_CACHE = None
    _DB_NAME_CACHE = None


__all__ = [
    "ADMIN_ID",
    "ADMIN_PASS",
    "ADMIN_USER",
    "ConfigError",
    "LOG_LEVEL",
    "SECRET_KEY",
    "SESSION_COOKIE_NAME",
    "STUDENTS_URL_PREFIX",
    "get_db_name",
    "get_mongo_uri",
    "reset_cache",
]
