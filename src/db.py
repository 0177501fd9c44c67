"""Shared SQLite helpers: WAL mode, row factory, explicit transactions."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def wal_connect(db_path: str | Path, row_factory: bool = False) -> sqlite3.Connection:
    """Open an autocommit SQLite connection with WAL journal mode.

    Statements commit on their own; multi-statement work goes through
    ``immediate_transaction``.

    Args:
        db_path: Path to database file.
        row_factory: If True, set conn.row_factory = sqlite3.Row.
    """
    conn = sqlite3.connect(str(db_path), timeout=10.0, isolation_level=None)
    conn.execute("PRAGMA journal_mode=WAL")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def immediate_transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Hold the write lock from the first read until commit."""
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
