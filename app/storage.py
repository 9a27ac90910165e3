"""Submission persistence.

The handlers only depend on the SubmissionStore protocol. The deployment picks
an implementation through SUBMISSION_STORE (none, memory or sqlite).
"""

from __future__ import annotations

import json
import os
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from app.config import Settings


class StorageError(RuntimeError):
    """A submission could not be written or read."""


class SubmissionStore(Protocol):
    def save(self, kind: str, record: Dict[str, Any]) -> str:
        """Persist a submission record and return its id.

        Raises:
            StorageError: if the record could not be written
        """
        ...

    def get(self, submission_id: str) -> Optional[Dict[str, Any]]:
        ...


def generate_submission_id(kind: str) -> str:
    """Unique id like ``quote_20261019_140509_ab12cd``."""
    return f"{kind}_{datetime.now(timezone.utc):%Y%m%d_%H%M%S}_{uuid.uuid4().hex[:6]}"


class InMemorySubmissionStore:
    """Keeps records in a dict; contents are lost on restart."""

    def __init__(self) -> None:
        self._records: Dict[str, Dict[str, Any]] = {}

    def save(self, kind: str, record: Dict[str, Any]) -> str:
        submission_id = generate_submission_id(kind)
        self._records[submission_id] = {"kind": kind, **record}
        return submission_id

    def get(self, submission_id: str) -> Optional[Dict[str, Any]]:
        return self._records.get(submission_id)

    def __len__(self) -> int:
        return len(self._records)


def _init_db(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    con = sqlite3.connect(path)
    try:
        cur = con.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS submissions (
                id TEXT PRIMARY KEY,
                kind TEXT NOT NULL,
                payload TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        con.commit()
    finally:
        con.close()


class SqliteSubmissionStore:
    """One row per submission; the record is stored as JSON."""

    def __init__(self, path: str) -> None:
        self.path = path
        try:
            _init_db(path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot initialise submission store at {path}: {e}") from e

    def save(self, kind: str, record: Dict[str, Any]) -> str:
        submission_id = generate_submission_id(kind)
        try:
            con = sqlite3.connect(self.path)
            try:
                con.execute(
                    "INSERT INTO submissions(id, kind, payload) VALUES(?, ?, ?)",
                    (submission_id, kind, json.dumps(record, ensure_ascii=False)),
                )
                con.commit()
            finally:
                con.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save {kind} submission: {e}") from e
        return submission_id

    def get(self, submission_id: str) -> Optional[Dict[str, Any]]:
        try:
            con = sqlite3.connect(self.path)
            try:
                row = con.execute(
                    "SELECT kind, payload FROM submissions WHERE id = ?", (submission_id,)
                ).fetchone()
            finally:
                con.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to load submission {submission_id}: {e}") from e
        if not row:
            return None
        return {"kind": row[0], **json.loads(row[1])}


def build_submission_store(settings: Settings) -> Optional[SubmissionStore]:
    backend = (settings.SUBMISSION_STORE or "none").strip().lower()
    if backend == "none":
        return None
    if backend == "memory":
        return InMemorySubmissionStore()
    if backend == "sqlite":
        return SqliteSubmissionStore(settings.SUBMISSION_DB_PATH)
    raise ValueError(f"Unknown SUBMISSION_STORE: {settings.SUBMISSION_STORE!r}")
