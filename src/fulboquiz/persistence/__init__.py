"""Persistence layer for the per-mode stats summaries emitted by sessions."""

from __future__ import annotations

import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from fulboquiz.scoring.state import StatsSummary


@dataclass
class StatsRecord:
    mode: str
    updated_at: datetime
    summary: StatsSummary


class StatsStore:
    """Simple SQLite-backed store keeping the latest summary per quiz mode."""

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "fulboquiz-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = fallback_dir / "fulboquiz.sqlite"
            conn = sqlite3.connect(self.db_path)
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS stats (
                mode TEXT PRIMARY KEY,
                total_answered INTEGER NOT NULL,
                average_score_percent INTEGER NOT NULL,
                best_streak INTEGER NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def save_summary(self, mode: str, summary: StatsSummary, *, updated_at: Optional[datetime] = None) -> None:
        updated_at = updated_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO stats (mode, total_answered, average_score_percent, best_streak, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(mode) DO UPDATE SET
                    total_answered = excluded.total_answered,
                    average_score_percent = excluded.average_score_percent,
                    best_streak = excluded.best_streak,
                    updated_at = excluded.updated_at
                """,
                (
                    mode,
                    summary.total_answered,
                    summary.average_score_percent,
                    summary.best_streak,
                    updated_at.isoformat(),
                ),
            )
            conn.commit()

    def get_summary(self, mode: str) -> Optional[StatsRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM stats WHERE mode = ?", (mode,)).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def list_summaries(self) -> List[StatsRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM stats ORDER BY mode").fetchall()
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: sqlite3.Row) -> StatsRecord:
        return StatsRecord(
            mode=row["mode"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
            summary=StatsSummary(
                total_answered=row["total_answered"],
                average_score_percent=row["average_score_percent"],
                best_streak=row["best_streak"],
            ),
        )


__all__ = ["StatsRecord", "StatsStore"]
