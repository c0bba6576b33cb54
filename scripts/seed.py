"""Seed helper that loads sample students into MongoDB."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from student_records.config import ConfigError, get_db_name, get_mongo_uri

ROOT_DIR = Path(__file__).resolve().parent.parent
BACKEND_DIR = ROOT_DIR / "backend"
ENV_PATH = BACKEND_DIR / ".env"
SEED_PATH = Path(__file__).resolve().parent / "seed.json"


def load_env() -> None:
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH)


def read_seed_file() -> List[Dict[str, Any]]:
    with SEED_PATH.open("r", encoding="utf-8") as seed_file:
        data = json.load(seed_file)
    students = data.get("students") if isinstance(data, dict) else None
    if not isinstance(students, list):
        raise ValueError("Seed file must contain a 'students' list")
    return students


def build_documents(students: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Assign sequential integer ids and bookkeeping fields."""

    now = datetime.now(timezone.utc)
    documents = []
    for index, student in enumerate(students, start=1):
        document = dict(student)
        document["_id"] = index
        document["email"] = str(document.get("email", "")).strip().lower()
        document.setdefault("is_active", True)
        document["created_at"] = now
        document["updated_at"] = now
        documents.append(document)
    return documents


def main() -> None:
    load_env()
    try:
        uri = get_mongo_uri()
        db_name = get_db_name()
    except ConfigError as exc:  # pragma: no cover - simple CLI utility
        print(f"Configuration error: {exc}")
        raise SystemExit(1)

    client = MongoClient(uri, serverSelectionTimeoutMS=5000)
    database = client[db_name]

    try:
        documents = build_documents(read_seed_file())

        students = database["students"]
        students.delete_many({})
        if documents:
            students.insert_many(documents)

        database["counters"].replace_one(
            {"_id": "students"},
            {"_id": "students", "value": len(documents)},
            upsert=True,
        )

        print(f"Loaded {len(documents)} student(s) into '{db_name}'.")
    except PyMongoError as exc:  # pragma: no cover - requires Mongo connection
        print(f"MongoDB error: {exc}")
        raise SystemExit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
