"""PostgreSQL storage implementation."""

import logging
import os
import psycopg2
from psycopg2.extras import Json, RealDictCursor

from core.interfaces import Storage

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = 'postgresql://localhost:5432/mindforge'


def summary_columns(state: dict) -> tuple:
    """Stats copied out of the document so they can be queried without parsing JSON."""
    stats = state.get('stats') or {}
    return (
        stats.get('totalGamesPlayed', 0),
        stats.get('currentStreak', 0),
        stats.get('longestStreak', 0),
        stats.get('lastPlayedDate'),
    )


class PostgresStorage(Storage):
    """One progress document per user in a JSONB column.

    The document is the source of truth; the summary columns are rewritten
    from it on every save.
    """

    def __init__(self, db_url: str = None):
        self.db_url = db_url or os.environ.get('DATABASE_URL', DEFAULT_DATABASE_URL)
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS progress_state (
                    user_id VARCHAR(64) PRIMARY KEY,
                    document JSONB NOT NULL,
                    total_games_played INTEGER NOT NULL DEFAULT 0,
                    current_streak INTEGER NOT NULL DEFAULT 0,
                    longest_streak INTEGER NOT NULL DEFAULT 0,
                    last_played_date DATE,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_progress_state_last_played
                ON progress_state(last_played_date)
            """)
        self._conn.commit()

    def close(self):
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_state(self, user_id: str = "default") -> dict | None:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute("SELECT document FROM progress_state WHERE user_id = %s", (user_id,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Error loading progress for {user_id}: {e}")
            return None
        return row['document'] if row else None

    def save_state(self, state: dict, user_id: str = "default") -> None:
        """Upsert the whole document in one statement."""
        total, streak, longest, last_played = summary_columns(state)
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO progress_state (user_id, document, total_games_played, current_streak,
                                                longest_streak, last_played_date, updated_at)
                    VALUES (%s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (user_id) DO UPDATE SET
                        document = EXCLUDED.document,
                        total_games_played = EXCLUDED.total_games_played,
                        current_streak = EXCLUDED.current_streak,
                        longest_streak = EXCLUDED.longest_streak,
                        last_played_date = EXCLUDED.last_played_date,
                        updated_at = CURRENT_TIMESTAMP
                """, (user_id, Json(state), total, streak, longest, last_played))
            self.conn.commit()
        except psycopg2.Error as e:
            logger.error(f"Error saving progress for {user_id}: {e}")
            self.conn.rollback()
            raise

    def list_users(self) -> list[str]:
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT user_id FROM progress_state ORDER BY user_id")
                return [row[0] for row in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Error listing users: {e}")
            return []

    def delete_state(self, user_id: str) -> bool:
        try:
            with self.conn.cursor() as cur:
                cur.execute("DELETE FROM progress_state WHERE user_id = %s", (user_id,))
                deleted = cur.rowcount > 0
            self.conn.commit()
            return deleted
        except psycopg2.Error as e:
            logger.error(f"Error deleting progress for {user_id}: {e}")
            self.conn.rollback()
            return False
