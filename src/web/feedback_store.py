"""SQLite backing store: per-resource aggregates, per-visitor votes, comments."""

import sqlite3
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from db import immediate_transaction, wal_connect

logger = structlog.get_logger()

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_VOTE_RETENTION_DAYS = 365


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


@dataclass(frozen=True)
class FeedbackAggregate:
    resource_id: str
    likes: int = 0
    dislikes: int = 0
    comment_count: int = 0
    updated_at: Optional[str] = None


@dataclass(frozen=True)
class Comment:
    id: str
    resource_id: str
    text: str
    visitor_hash: str
    timestamp: str
    helpful: int = 0

    def to_dict(self) -> dict:
        """Public shape; the visitor hash never leaves the server."""
        return {"id": self.id, "text": self.text, "timestamp": self.timestamp, "helpful": self.helpful}


class FeedbackStore:
    """Key-value style store over SQLite.

    ``increment`` is a single upsert, so concurrent votes on one resource
    serialize in SQLite. ``compare_and_set_vote`` reads and writes a visitor's
    vote row under one write lock.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        return wal_connect(self.db_path, row_factory=True)

    def _init_db(self) -> None:
        conn = self._get_conn()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS feedback (
                    resource_id TEXT PRIMARY KEY,
                    likes INTEGER NOT NULL DEFAULT 0 CHECK(likes >= 0),
                    dislikes INTEGER NOT NULL DEFAULT 0 CHECK(dislikes >= 0),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS vote_interactions (
                    visitor_id TEXT NOT NULL,
                    resource_id TEXT NOT NULL,
                    vote TEXT CHECK(vote IN ('like', 'dislike')),
                    timestamp TEXT NOT NULL,
                    expires_at INTEGER NOT NULL,
                    PRIMARY KEY (visitor_id, resource_id)
                );
                CREATE TABLE IF NOT EXISTS comments (
                    comment_id TEXT PRIMARY KEY,
                    resource_id TEXT NOT NULL,
                    text TEXT NOT NULL,
                    visitor_hash TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    helpful INTEGER NOT NULL DEFAULT 0
                );
                CREATE INDEX IF NOT EXISTS idx_comments_resource ON comments(resource_id, timestamp DESC);
            """)
        finally:
            conn.close()

    # --- Votes ---

    @staticmethod
    def _read_vote(conn: sqlite3.Connection, visitor_id: str, resource_id: str, now: float) -> Optional[str]:
        row = conn.execute(
            "SELECT vote FROM vote_interactions WHERE visitor_id = ? AND resource_id = ? AND expires_at > ?",
            (visitor_id, resource_id, int(now)),
        ).fetchone()
        return row["vote"] if row else None

    def get_vote(self, visitor_id: str, resource_id: str) -> Optional[str]:
        """Current vote ("like" / "dislike") or None; expired rows read as None."""
        conn = self._get_conn()
        try:
            return self._read_vote(conn, visitor_id, resource_id, time.time())
        finally:
            conn.close()

    def compare_and_set_vote(
        self,
        visitor_id: str,
        resource_id: str,
        expected: Optional[str],
        new: Optional[str],
        retention_days: int = DEFAULT_VOTE_RETENTION_DAYS,
    ) -> bool:
        """Write ``new`` only if the stored vote is still ``expected``."""
        now = time.time()
        conn = self._get_conn()
        try:
            with immediate_transaction(conn):
                if self._read_vote(conn, visitor_id, resource_id, now) != expected:
                    return False
                conn.execute(
                    "INSERT INTO vote_interactions (visitor_id, resource_id, vote, timestamp, expires_at) "
                    "VALUES (?, ?, ?, ?, ?) "
                    "ON CONFLICT(visitor_id, resource_id) DO UPDATE SET "
                    "vote = excluded.vote, timestamp = excluded.timestamp, expires_at = excluded.expires_at",
                    (visitor_id, resource_id, new, utc_timestamp(), int(now) + retention_days * SECONDS_PER_DAY),
                )
            return True
        finally:
            conn.close()

    def purge_expired_votes(self) -> int:
        """Drop vote rows past their retention. Aggregates are left as they are."""
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM vote_interactions WHERE expires_at <= ?", (int(time.time()),))
            if cur.rowcount:
                logger.info("feedback_store.votes_purged", count=cur.rowcount)
            return cur.rowcount
        finally:
            conn.close()

    # --- Aggregates ---

    def increment(self, resource_id: str, like_delta: int, dislike_delta: int) -> None:
        """Atomic increment-or-create; counters never drop below zero."""
        now = utc_timestamp()
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO feedback (resource_id, likes, dislikes, created_at, updated_at)
                VALUES (?, MAX(?, 0), MAX(?, 0), ?, ?)
                ON CONFLICT(resource_id) DO UPDATE SET
                    likes = MAX(feedback.likes + ?, 0),
                    dislikes = MAX(feedback.dislikes + ?, 0),
                    updated_at = ?
                """,
                (resource_id, like_delta, dislike_delta, now, now, like_delta, dislike_delta, now),
            )
        finally:
            conn.close()

    def get_aggregate(self, resource_id: str) -> FeedbackAggregate:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT likes, dislikes, updated_at FROM feedback WHERE resource_id = ?",
                (resource_id,),
            ).fetchone()
            count = conn.execute(
                "SELECT COUNT(*) AS cnt FROM comments WHERE resource_id = ?",
                (resource_id,),
            ).fetchone()["cnt"]
        finally:
            conn.close()
        if row is None:
            return FeedbackAggregate(resource_id=resource_id, comment_count=count)
        return FeedbackAggregate(
            resource_id=resource_id,
            likes=row["likes"],
            dislikes=row["dislikes"],
            comment_count=count,
            updated_at=row["updated_at"],
        )

    def all_aggregates(self) -> dict[str, FeedbackAggregate]:
        """Every resource with votes or comments."""
        conn = self._get_conn()
        try:
            votes = conn.execute("SELECT resource_id, likes, dislikes, updated_at FROM feedback").fetchall()
            counts = conn.execute(
                "SELECT resource_id, COUNT(*) AS cnt FROM comments GROUP BY resource_id"
            ).fetchall()
        finally:
            conn.close()
        comment_counts = {r["resource_id"]: r["cnt"] for r in counts}
        result = {
            r["resource_id"]: FeedbackAggregate(
                resource_id=r["resource_id"],
                likes=r["likes"],
                dislikes=r["dislikes"],
                comment_count=comment_counts.get(r["resource_id"], 0),
                updated_at=r["updated_at"],
            )
            for r in votes
        }
        for resource_id, cnt in comment_counts.items():
            if resource_id not in result:
                result[resource_id] = FeedbackAggregate(resource_id=resource_id, comment_count=cnt)
        return result

    # --- Comments ---

    def add_comment(self, comment: Comment) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO comments (comment_id, resource_id, text, visitor_hash, timestamp, helpful) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    comment.id,
                    comment.resource_id,
                    comment.text,
                    comment.visitor_hash,
                    comment.timestamp,
                    comment.helpful,
                ),
            )
        finally:
            conn.close()

    def list_comments(self, resource_id: str) -> list[Comment]:
        """Comments for a resource, newest first."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT comment_id, resource_id, text, visitor_hash, timestamp, helpful FROM comments "
                "WHERE resource_id = ? ORDER BY timestamp DESC, rowid DESC",
                (resource_id,),
            ).fetchall()
        finally:
            conn.close()
        return [
            Comment(
                id=r["comment_id"],
                resource_id=r["resource_id"],
                text=r["text"],
                visitor_hash=r["visitor_hash"],
                timestamp=r["timestamp"],
                helpful=r["helpful"],
            )
            for r in rows
        ]
