"""Shared SQLite helpers: WAL mode, row_factory defaults, URL parsing."""

import sqlite3
from pathlib import Path

SQLITE_SCHEME = "sqlite:///"


def database_path_from_url(url: str) -> Path:
    """Turn a DATABASE_URL into a filesystem path.

    Accepts ``sqlite:///relative.db``, ``sqlite:////abs/path.db`` or a bare
    path. ``~`` is expanded.

    Raises:
        ValueError: For empty URLs or non-sqlite schemes.
    """
    url = (url or "").strip()
    if not url:
        raise ValueError("Database URL is empty")
    if url.startswith(SQLITE_SCHEME):
        raw = url[len(SQLITE_SCHEME):]
    elif "://" in url:
        scheme = url.split("://", 1)[0]
        raise ValueError(f"Unsupported database scheme: {scheme}")
    else:
        raw = url
    if not raw:
        raise ValueError(f"Database URL has no path: {url}")
    return Path(raw).expanduser()


def wal_connect(db_path: str | Path, row_factory: bool = False) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode.

    Args:
        db_path: Path to database file.
        row_factory: If True, set conn.row_factory = sqlite3.Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn
