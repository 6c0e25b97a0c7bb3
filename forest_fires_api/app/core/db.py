"""
SQLite record store for forest fire statistics.

This module provides the repository used by the service layer.  A
``ForestFireStore`` owns a single SQLite connection, created when the
application starts and closed on shutdown; the connection is guarded
by a re‑entrant lock so that requests served from the thread pool are
applied one at a time.

Queries are expressed with ``RecordQuery``, a typed description of the
supported predicates (field equality, an inclusive year range and
offset/limit pagination) which is translated into parameterized SQL.
Results are returned as plain dicts without the internal row id, in
insertion order.

The ``(year, autonomous_community)`` pair is declared ``UNIQUE`` so
duplicate keys are rejected by the database itself; ``insert`` turns
the resulting ``IntegrityError`` into ``DuplicateKeyError``.
"""

import logging
import os
import sqlite3
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("year", "autonomous_community", "number_of_accidents", "percentage_of_large_fires")
KEY_FIELDS = ("year", "autonomous_community")
STRING_FIELDS = frozenset({"autonomous_community"})

# SQLite stores integers as signed 64-bit values.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS forest_fires (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    year INTEGER NOT NULL,
    autonomous_community TEXT NOT NULL,
    number_of_accidents NUMERIC NOT NULL,
    percentage_of_large_fires NUMERIC NOT NULL,
    UNIQUE (year, autonomous_community)
);
"""

_COLUMNS = ", ".join(RECORD_FIELDS)


def fits_int64(value: Any) -> bool:
    """Return False for Python ints that SQLite cannot bind."""
    if isinstance(value, int) and not isinstance(value, bool):
        return INT64_MIN <= value <= INT64_MAX
    return True


def _bound(value: Any) -> Any:
    # Range bounds outside the 64-bit range are compared as REAL.
    return value if fits_int64(value) else float(value)


class DuplicateKeyError(Exception):
    """A record with the same ``(year, autonomous_community)`` already exists."""


@dataclass
class RecordQuery:
    """Typed filter over the records collection.

    ``equals`` maps record field names to the value they must be equal
    to.  A field that is not part of the record, or a value whose type
    can never match the field (e.g. a number for the community), makes
    the query match nothing.  So does an integer outside the 64-bit
    range SQLite stores.
    """

    equals: Dict[str, Any] = field(default_factory=dict)
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    offset: int = 0
    limit: Optional[int] = None

    @classmethod
    def by_key(cls, year: Any, autonomous_community: str) -> "RecordQuery":
        return cls(equals={"year": year, "autonomous_community": autonomous_community})

    def is_satisfiable(self) -> bool:
        for name, value in self.equals.items():
            if name not in RECORD_FIELDS:
                return False
            if (name in STRING_FIELDS) != isinstance(value, str):
                return False
            if not fits_int64(value):
                return False
        return True

    def where_clause(self) -> Tuple[str, List[Any]]:
        clauses: List[str] = []
        params: List[Any] = []
        for name, value in self.equals.items():
            clauses.append(f"{name} = ?")
            params.append(value)
        if self.year_from is not None:
            clauses.append("year >= ?")
            params.append(_bound(self.year_from))
        if self.year_to is not None:
            clauses.append("year <= ?")
            params.append(_bound(self.year_to))
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are used as given; relative paths
    are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # forest_fires_api/
    return str((base_dir / database_url).resolve())


class ForestFireStore:
    """Repository over the ``forest_fires`` table."""

    def __init__(self, database_url: str) -> None:
        self.path = get_database_path(database_url)
        self._lock = threading.RLock()
        # Requests run in a thread pool; the lock serialises access to
        # the shared connection.
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._lock, self._conn:
            self._conn.executescript(SCHEMA)
        logger.info("Opened record store at %s", self.path)

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info("Closed record store at %s", self.path)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Dict[str, Any]:
        return {name: row[name] for name in RECORD_FIELDS}

    def count(self, query: Optional[RecordQuery] = None) -> int:
        query = query or RecordQuery()
        if not query.is_satisfiable():
            return 0
        where, params = query.where_clause()
        with self._lock:
            row = self._conn.execute(f"SELECT COUNT(*) FROM forest_fires{where}", params).fetchone()
        return row[0]

    def find(self, query: Optional[RecordQuery] = None) -> List[Dict[str, Any]]:
        """Return the records matching ``query`` in insertion order."""
        query = query or RecordQuery()
        if not query.is_satisfiable():
            return []
        where, params = query.where_clause()
        sql = f"SELECT {_COLUMNS} FROM forest_fires{where} ORDER BY id"
        # SQLite requires a LIMIT before OFFSET; -1 means no limit.
        if query.limit is not None or query.offset:
            sql += " LIMIT ? OFFSET ?"
            params.extend([query.limit if query.limit is not None else -1, query.offset])
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def find_one(self, year: Any, autonomous_community: str) -> Optional[Dict[str, Any]]:
        records = self.find(RecordQuery.by_key(year, autonomous_community))
        return records[0] if records else None

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a validated record.

        Raises ``DuplicateKeyError`` when the key is already taken.
        """
        values = tuple(record[name] for name in RECORD_FIELDS)
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    f"INSERT INTO forest_fires ({_COLUMNS}) VALUES (?, ?, ?, ?)", values
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateKeyError(
                f"Record {record['year']}/{record['autonomous_community']} already exists"
            ) from exc
        return {name: record[name] for name in RECORD_FIELDS}

    def insert_many(self, records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert records, skipping those whose key already exists.

        Returns the records that were actually inserted.
        """
        inserted: List[Dict[str, Any]] = []
        with self._lock, self._conn:
            for record in records:
                cursor = self._conn.execute(
                    f"INSERT OR IGNORE INTO forest_fires ({_COLUMNS}) VALUES (?, ?, ?, ?)",
                    tuple(record[name] for name in RECORD_FIELDS),
                )
                if cursor.rowcount:
                    inserted.append({name: record[name] for name in RECORD_FIELDS})
        return inserted

    def update(self, year: Any, autonomous_community: str, changes: Dict[str, Any]) -> int:
        """Set non‑key fields on the record with the given key.

        Returns the number of updated records (0 or 1).
        """
        fields = [name for name in changes if name in RECORD_FIELDS and name not in KEY_FIELDS]
        if not fields:
            return self.count(RecordQuery.by_key(year, autonomous_community))
        assignments = ", ".join(f"{name} = ?" for name in fields)
        params = [changes[name] for name in fields] + [year, autonomous_community]
        with self._lock, self._conn:
            cursor = self._conn.execute(
                f"UPDATE forest_fires SET {assignments} WHERE year = ? AND autonomous_community = ?",
                params,
            )
        return cursor.rowcount

    def remove(self, query: Optional[RecordQuery] = None) -> int:
        """Delete the records matching ``query`` and return how many were removed."""
        query = query or RecordQuery()
        if not query.is_satisfiable():
            return 0
        where, params = query.where_clause()
        with self._lock, self._conn:
            cursor = self._conn.execute(f"DELETE FROM forest_fires{where}", params)
        return cursor.rowcount
