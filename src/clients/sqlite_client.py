"""SQLite client for the development document backend."""

import json
import sqlite3
import threading
from sqlite3 import Connection
from typing import Any, Optional


class SqliteClient:
    """Stores JSON documents in SQLite tables of (id, document) rows.

    Calls are made from worker threads, so a single connection is shared
    across threads and serialised with a lock.
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self._connection = sqlite3.connect(self.connection_string, check_same_thread=False)
        self._lock = threading.Lock()

    @property
    def connection(self) -> Connection:
        """Get the database connection."""
        return self._connection

    def execute_query(self, query: str, params=None):
        """Execute a query and return all results."""
        with self._lock:
            cursor = self._connection.cursor()
            try:
                cursor.execute(query, params or ())
                # Commit for write operations (INSERT, UPDATE, DELETE)
                if query.strip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
                    self._connection.commit()
                return cursor.fetchall()
            finally:
                cursor.close()

    def ensure_document_table(self, table: str) -> None:
        self.execute_query(
            f"CREATE TABLE IF NOT EXISTS {table} (id TEXT PRIMARY KEY, document TEXT NOT NULL)"
        )

    def insert_document(self, table: str, doc_id: str, document: dict[str, Any]) -> None:
        """Insert a document body serialised as JSON.

        Raises:
            sqlite3.IntegrityError: If the id already exists.
        """
        self.execute_query(
            f"INSERT INTO {table} (id, document) VALUES (?, ?)",
            (doc_id, json.dumps(document)),
        )

    def select_document(self, table: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Return the document with its id, or None."""
        rows = self.execute_query(f"SELECT id, document FROM {table} WHERE id = ?", (doc_id,))
        if not rows:
            return None
        return _row_to_document(rows[0])

    def select_documents(
        self,
        table: str,
        field: Optional[str] = None,
        value: Any = None,
    ) -> list[dict[str, Any]]:
        """Return documents in insertion order, optionally where a top-level field equals value."""
        query = f"SELECT id, document FROM {table}"
        params: tuple = ()
        if field is not None:
            query += " WHERE json_extract(document, ?) = ?"
            params = (f"$.{field}", value)
        query += " ORDER BY rowid"
        return [_row_to_document(row) for row in self.execute_query(query, params)]

    def close(self):
        """Close the database connection."""
        with self._lock:
            self._connection.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
        return False


def _row_to_document(row: tuple) -> dict[str, Any]:
    doc_id, document = row
    return {**json.loads(document), "id": doc_id}
