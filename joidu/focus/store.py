"""
Tool: Pattern Store
Purpose: Persisted key-value storage for energy patterns and break history

Values are JSON documents keyed by logical name (user-energy-patterns,
break-history, ...). Anything missing or unreadable comes back as None so
callers can fall back to defaults; a broken store should never break a
focus session.

Usage:
    from joidu.focus.store import SQLiteStore, MemoryStore, append_bounded

    store = SQLiteStore()
    store.set("energy-preferences", {"2026-01-05": "high"})
    prefs = store.get("energy-preferences")

    append_bounded(store, "break-history", {"breakDuration": 10}, cap=50)

Dependencies:
    - sqlite3 (stdlib)
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from joidu.focus import DB_PATH
from joidu.logging_config import get_logger


logger = get_logger(__name__)


class PatternStore(Protocol):
    """Minimal persistence port used by the advisor and the guard."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def update(self, key: str, fn: Callable[[Any | None], Any]) -> Any: ...


def _decode(key: str, raw: str | None) -> Any | None:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("store_value_corrupt", key=key)
        return None


class MemoryStore:
    """
    In-process store with local-storage semantics.

    Values are kept serialized, so what you get back is always a fresh copy.
    """

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        return _decode(key, self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def set_raw(self, key: str, raw: str) -> None:
        """Store a raw string as-is (used to simulate corruption)."""
        self._data[key] = raw

    def update(self, key: str, fn: Callable[[Any | None], Any]) -> Any:
        value = fn(self.get(key))
        self.set(key, value)
        return value

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLiteStore:
    """Durable store backed by a single kv_store table."""

    def __init__(self, db_path: Path | str | None = None):
        self.db_path = Path(db_path) if db_path else DB_PATH

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection, creating tables if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row

        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
        return conn

    def get(self, key: str) -> Any | None:
        conn = self.get_connection()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return _decode(key, row["value"] if row else None)

    def set(self, key: str, value: Any) -> None:
        conn = self.get_connection()
        try:
            self._write(conn, key, value)
            conn.commit()
        finally:
            conn.close()

    def set_raw(self, key: str, raw: str) -> None:
        conn = self.get_connection()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """,
                (key, raw, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def update(self, key: str, fn: Callable[[Any | None], Any]) -> Any:
        """Read-modify-write inside one write transaction."""
        conn = self.get_connection()
        try:
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            value = fn(_decode(key, row["value"] if row else None))
            self._write(conn, key, value)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
        return value

    def keys(self) -> list[str]:
        conn = self.get_connection()
        try:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        finally:
            conn.close()
        return [row["key"] for row in rows]

    @staticmethod
    def _write(conn: sqlite3.Connection, key: str, value: Any) -> None:
        conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """,
            (key, json.dumps(value), datetime.now().isoformat()),
        )


def load_list(store: PatternStore, key: str) -> list[Any]:
    """Read a stored list, treating anything else as empty."""
    value = store.get(key)
    if isinstance(value, list):
        return value
    if value is not None:
        logger.warning("store_value_wrong_shape", key=key, expected="list")
    return []


def load_dict(store: PatternStore, key: str) -> dict[str, Any]:
    """Read a stored mapping, treating anything else as empty."""
    value = store.get(key)
    if isinstance(value, dict):
        return value
    if value is not None:
        logger.warning("store_value_wrong_shape", key=key, expected="dict")
    return {}


def bounded(items: list[Any], cap: int) -> list[Any]:
    """Keep the newest `cap` items, oldest dropped first."""
    return items[-cap:] if len(items) > cap else items


def append_bounded(store: PatternStore, key: str, entry: Any, cap: int) -> list[Any]:
    """
    Append to a stored FIFO-capped list.

    Args:
        store: Pattern store
        key: Logical key of the list
        entry: JSON-serializable item to append
        cap: Maximum number of entries kept

    Returns:
        The list as persisted
    """

    def _append(current: Any | None) -> list[Any]:
        items = current if isinstance(current, list) else []
        items.append(entry)
        return bounded(items, cap)

    return store.update(key, _append)
