"""SQLite store for chat messages, reply patterns and facts."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, Optional

import structlog

from db import wal_connect
from shared_types import Sender

from .errors import PersistenceError
from .models import Fact, Message, ReplyPattern
from .seed import DEFAULT_FACTS, DEFAULT_PATTERNS

logger = structlog.get_logger()

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS messages (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        content TEXT NOT NULL CHECK(length(content) > 0),
        sender TEXT NOT NULL CHECK(sender IN ('user','bot')),
        timestamp TIMESTAMP NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_messages_ts ON messages(timestamp ASC, id ASC);

    CREATE TABLE IF NOT EXISTS reply_patterns (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        pattern TEXT NOT NULL CHECK(length(pattern) > 0),
        response TEXT NOT NULL,
        CONSTRAINT unique_pattern UNIQUE (pattern)
    );

    CREATE TABLE IF NOT EXISTS facts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        category TEXT NOT NULL,
        "key" TEXT NOT NULL,
        "value" TEXT NOT NULL
    );
"""


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_message(row: sqlite3.Row) -> Message:
    return Message(
        id=row["id"],
        content=row["content"],
        sender=Sender(row["sender"]),
        timestamp=row["timestamp"],
    )


def _to_fact(row: sqlite3.Row) -> Fact:
    return Fact(id=row["id"], category=row["category"], key=row["key"], value=row["value"])


def _to_pattern(row: sqlite3.Row) -> ReplyPattern:
    return ReplyPattern(id=row["id"], pattern=row["pattern"], response=row["response"])


class ChatStore:
    """Explicit store handle: open at startup, close at shutdown.

    Every operation opens its own connection and runs one statement, so
    concurrent requests rely on SQLite's own locking. Rows tie-break on
    ascending primary key wherever "first match wins".
    """

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, seed: bool = True) -> "ChatStore":
        """Create tables and seed them. Safe to call against an existing database."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create database directory: {e}") from e
        self._open = True
        try:
            self.bootstrap(seed=seed)
        except PersistenceError:
            self._open = False
            raise
        logger.info("store.opened", db_path=str(self.db_path))
        return self

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.info("store.closed", db_path=str(self.db_path))

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if not self._open:
            raise PersistenceError("Store is not open")
        try:
            conn = wal_connect(self.db_path, row_factory=True)
            # SQLite lower() only folds ASCII
            conn.create_function("py_lower", 1, str.lower, deterministic=True)
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot connect to database: {e}") from e
        try:
            yield conn
            conn.commit()
        except (sqlite3.Error, OverflowError, ValueError) as e:
            raise PersistenceError(str(e)) from e
        finally:
            conn.close()

    # --- Bootstrap ---

    def bootstrap(self, seed: bool = True) -> None:
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
        if seed:
            self.seed_facts(DEFAULT_FACTS)
            self.seed_patterns(DEFAULT_PATTERNS)
        logger.debug("store.bootstrapped", seeded=seed)

    def seed_facts(self, facts: Iterable[tuple[str, str, str]]) -> int:
        """Insert facts only when the table is empty. Returns rows inserted."""
        rows = list(facts)
        with self._connect() as conn:
            # Count and insert under one write lock so concurrent bootstraps seed once
            conn.execute("BEGIN IMMEDIATE")
            (count,) = conn.execute("SELECT COUNT(*) FROM facts").fetchone()
            if count:
                return 0
            conn.executemany(
                'INSERT INTO facts (category, "key", "value") VALUES (?, ?, ?)', rows
            )
        return len(rows)

    def seed_patterns(self, patterns: Iterable[tuple[str, str]]) -> int:
        """Upsert patterns; an existing pattern takes the new response."""
        rows = list(patterns)
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO reply_patterns (pattern, response) VALUES (?, ?)
                ON CONFLICT (pattern) DO UPDATE SET response = excluded.response
                """,
                rows,
            )
        return len(rows)

    # --- Messages ---

    def add_message(self, content: str, sender: Sender) -> Message:
        now = datetime.now(timezone.utc).isoformat()
        sender = Sender(sender)
        with self._connect() as conn:
            cur = conn.execute(
                "INSERT INTO messages (content, sender, timestamp) VALUES (?, ?, ?)",
                (content, sender.value, now),
            )
            msg_id = cur.lastrowid
        return Message(id=msg_id, content=content, sender=sender, timestamp=now)

    def list_messages(self, limit: int = 50, offset: int = 0) -> list[Message]:
        """Oldest first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, content, sender, timestamp FROM messages
                ORDER BY timestamp ASC, id ASC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            ).fetchall()
        return [_to_message(r) for r in rows]

    def count_messages(self) -> int:
        with self._connect() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM messages").fetchone()
        return count

    def clear_messages(self) -> int:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM messages")
            deleted = cur.rowcount
        logger.info("store.messages_cleared", deleted=deleted)
        return deleted

    # --- Facts & patterns (read-only for resolution) ---

    def search_facts(self, term: str) -> list[Fact]:
        """Case-insensitive substring match on category, key or value."""
        like = f"%{_escape_like(term.lower())}%"
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, category, "key", "value" FROM facts
                WHERE py_lower(category) LIKE ? ESCAPE '\\'
                   OR py_lower("key") LIKE ? ESCAPE '\\'
                   OR py_lower("value") LIKE ? ESCAPE '\\'
                ORDER BY id ASC
                """,
                (like, like, like),
            ).fetchall()
        return [_to_fact(r) for r in rows]

    def find_prefix_pattern(self, text: str) -> Optional[ReplyPattern]:
        """First pattern (by id) that ``text`` starts with."""
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT id, pattern, response FROM reply_patterns
                WHERE instr(?, py_lower(pattern)) = 1
                ORDER BY id ASC LIMIT 1
                """,
                (text.lower(),),
            ).fetchone()
        return _to_pattern(row) if row else None

    def find_contained_pattern(self, text: str) -> Optional[ReplyPattern]:
        """First pattern (by id) found anywhere inside ``text``."""
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT id, pattern, response FROM reply_patterns
                WHERE instr(?, py_lower(pattern)) > 0
                ORDER BY id ASC LIMIT 1
                """,
                (text.lower(),),
            ).fetchone()
        return _to_pattern(row) if row else None

    def list_patterns(self) -> list[ReplyPattern]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, pattern, response FROM reply_patterns ORDER BY id ASC"
            ).fetchall()
        return [_to_pattern(r) for r in rows]

    def list_facts(self) -> list[Fact]:
        with self._connect() as conn:
            rows = conn.execute(
                'SELECT id, category, "key", "value" FROM facts ORDER BY id ASC'
            ).fetchall()
        return [_to_fact(r) for r in rows]
