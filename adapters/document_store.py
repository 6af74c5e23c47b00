"""Document stores holding the whole clinic schedule as one JSON document."""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "schedules"
DEFAULT_DOCUMENT_ID = "current"


class DocumentStoreError(RuntimeError):
    """Raised when the backing store fails to read or write."""


class DocumentStore(Protocol):
    def load_latest(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, document: Dict[str, Any]) -> None:
        ...


class SqliteDocumentStore:
    """Stores documents as JSON blobs in a single SQLite table."""

    def __init__(
        self,
        path: str | Path = "clinic_roster.sqlite",
        *,
        collection: str = DEFAULT_COLLECTION,
        document_id: str = DEFAULT_DOCUMENT_ID,
    ) -> None:
        self.path = Path(path)
        self.collection = collection
        self.document_id = document_id
        self.ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def ensure_schema(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS documents (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        collection TEXT NOT NULL,
                        doc_id TEXT NOT NULL,
                        payload_json TEXT NOT NULL,
                        saved_at TEXT NOT NULL DEFAULT (datetime('now')),
                        UNIQUE(collection, doc_id)
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise DocumentStoreError(str(exc)) from exc

    def load_latest(self) -> Optional[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT payload_json FROM documents WHERE collection = ? ORDER BY saved_at DESC, id DESC LIMIT 1",
                    (self.collection,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise DocumentStoreError(str(exc)) from exc
        if not row or not row[0]:
            return None
        try:
            document = json.loads(row[0])
        except ValueError as exc:
            raise DocumentStoreError(f"Stored document is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise DocumentStoreError(f"Stored document is a {type(document).__name__}, expected an object")
        return document

    def save(self, document: Dict[str, Any]) -> None:
        blob = json.dumps(document, ensure_ascii=False)
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO documents(collection, doc_id, payload_json, saved_at) VALUES (?, ?, ?, datetime('now')) "
                    "ON CONFLICT(collection, doc_id) DO UPDATE SET payload_json=excluded.payload_json, saved_at=excluded.saved_at",
                    (self.collection, self.document_id, blob),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise DocumentStoreError(str(exc)) from exc
        logger.debug("Saved document %s/%s (%d bytes)", self.collection, self.document_id, len(blob))


class FirestoreDocumentStore:
    """Cloud Firestore backend.

    Only the first document of the collection is read, newest ``saved_at``
    first when the field is present.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        collection: str = DEFAULT_COLLECTION,
        document_id: str = DEFAULT_DOCUMENT_ID,
        project: str | None = None,
    ) -> None:
        self._client = client
        self._project = project
        self.collection = collection
        self.document_id = document_id

    @property
    def client(self) -> Any:
        if self._client is None:
            from google.cloud import firestore

            self._client = firestore.Client(project=self._project)
        return self._client

    def load_latest(self) -> Optional[Dict[str, Any]]:
        try:
            docs = [doc.to_dict() or {} for doc in self.client.collection(self.collection).stream()]
        except Exception as exc:
            raise DocumentStoreError(f"Firestore read failed: {exc}") from exc
        if not docs:
            return None
        stamped = [doc for doc in docs if doc.get("saved_at")]
        if stamped:
            return max(stamped, key=lambda doc: str(doc["saved_at"]))
        return docs[0]

    def save(self, document: Dict[str, Any]) -> None:
        try:
            self.client.collection(self.collection).document(self.document_id).set(document)
        except Exception as exc:
            raise DocumentStoreError(f"Firestore write failed: {exc}") from exc
