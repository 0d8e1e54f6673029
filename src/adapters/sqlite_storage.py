"""SQLite storage adapter.

Implements the core BatchStorePort and the CDP target-id registry using a
simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from core.models import ClosedBatch, TabSnapshot


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the BatchStorePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - closed_batch: metadata row for the single outstanding batch
        - closed_tabs: snapshots belonging to that batch, in close order
        - targets: CDP target id -> integer tab id registry
        """

        with self._connect() as conn:
            # closed_batch holds at most one row (id = 1).
            # Fields:
            # - count: number of tabs the trigger asked to close
            # - created_at: when the batch was recorded
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS closed_batch (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    count INTEGER NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )
            # closed_tabs keeps the snapshots restore reopens.
            # Fields:
            # - position: order in which tabs were captured (PRIMARY KEY)
            # - tab_id: integer tab id at close time
            # - url, title: captured tab metadata
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS closed_tabs (
                    position INTEGER PRIMARY KEY,
                    tab_id INTEGER NOT NULL,
                    url TEXT NOT NULL,
                    title TEXT
                )
                """
            )
            # targets maps opaque CDP target ids to increasing integers.
            # Fields:
            # - id: auto-increment tab id, grows with first sighting
            # - target_id: CDP target id (UNIQUE)
            # - last_seen: refreshed on each listing, used for cleanup
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS targets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    target_id TEXT NOT NULL UNIQUE,
                    last_seen TIMESTAMP NOT NULL
                )
                """
            )

    def persist_closed_batch(self, batch: ClosedBatch) -> None:
        """Replace any previous batch with ``batch`` in one transaction."""

        with self._connect() as conn:
            conn.execute("DELETE FROM closed_tabs")
            conn.execute(
                """
                INSERT INTO closed_batch (id, count, created_at)
                VALUES (1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    count = excluded.count,
                    created_at = excluded.created_at
                """,
                (batch.count, batch.created_at.isoformat()),
            )
            conn.executemany(
                "INSERT INTO closed_tabs (position, tab_id, url, title) VALUES (?, ?, ?, ?)",
                [
                    (position, snapshot.id, snapshot.url, snapshot.title)
                    for position, snapshot in enumerate(batch.tabs)
                ],
            )

    def load_closed_batch(self) -> Optional[ClosedBatch]:
        """Return the outstanding batch, or None when there is none."""

        with self._connect() as conn:
            meta = conn.execute("SELECT count, created_at FROM closed_batch WHERE id = 1").fetchone()
            if meta is None:
                return None
            rows = conn.execute(
                "SELECT tab_id, url, title FROM closed_tabs ORDER BY position"
            ).fetchall()
        tabs = tuple(
            TabSnapshot(id=int(row["tab_id"]), url=row["url"], title=row["title"] or "")
            for row in rows
        )
        return ClosedBatch(
            tabs=tabs,
            count=int(meta["count"]),
            created_at=datetime.fromisoformat(meta["created_at"]),
        )

    def clear_closed_batch(self) -> None:
        """Drop the outstanding batch."""

        with self._connect() as conn:
            conn.execute("DELETE FROM closed_tabs")
            conn.execute("DELETE FROM closed_batch")

    def register_targets(self, target_ids: Iterable[str]) -> dict[str, int]:
        """Return integer ids for ``target_ids``, registering unseen ones in order."""

        now = datetime.now(timezone.utc).isoformat()
        ids = list(target_ids)
        with self._connect() as conn:
            for target_id in ids:
                conn.execute(
                    """
                    INSERT INTO targets (target_id, last_seen)
                    VALUES (?, ?)
                    ON CONFLICT(target_id) DO UPDATE SET last_seen = excluded.last_seen
                    """,
                    (target_id, now),
                )
            if not ids:
                return {}
            placeholders = ",".join("?" for _ in ids)
            rows = conn.execute(
                f"SELECT id, target_id FROM targets WHERE target_id IN ({placeholders})",
                ids,
            ).fetchall()
        return {row["target_id"]: int(row["id"]) for row in rows}

    def lookup_target(self, tab_id: int) -> Optional[str]:
        """Return the CDP target id registered for ``tab_id``."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT target_id FROM targets WHERE id = ?",
                (tab_id,),
            ).fetchone()
        return row["target_id"] if row else None

    def cleanup_targets(self, ttl_days: int) -> int:
        """Delete registry rows not seen for ``ttl_days`` and return how many."""

        cutoff = datetime.now(timezone.utc) - timedelta(days=ttl_days)
        with self._connect() as conn:
            cur = conn.execute(
                "DELETE FROM targets WHERE last_seen < ?",
                (cutoff.isoformat(),),
            )
            return cur.rowcount
