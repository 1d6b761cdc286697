import sqlite3 as sql
from typing import Optional

PLAYERS_KEY = "players"
TEAMS_KEY = "teams"
SCORES_KEY = "scores"

def ensure_state(conn: sql.Connection) -> None:
  """Create the state table if it does not exist yet."""
  conn.execute(
    """
    CREATE TABLE IF NOT EXISTS state (
      key TEXT PRIMARY KEY,
      value TEXT,
      updated_at TEXT DEFAULT CURRENT_TIMESTAMP
    )
    """
  )
  conn.commit()

def truncate_state(conn: sql.Connection) -> None:
  """Drop and recreate the state table."""
  conn.execute("DROP TABLE IF EXISTS state")
  ensure_state(conn)

def fetch_state(conn: sql.Connection, key: str) -> Optional[str]:
  """Return the raw value stored under key, or None."""
  row = conn.execute("SELECT value FROM state WHERE key = ?", (key,)).fetchone()
  return row[0] if row else None

def insert_state(conn: sql.Connection, key: str, value: str) -> None:
  conn.execute(
    """INSERT INTO state (key, value) VALUES (?, ?)
    ON CONFLICT(key) DO UPDATE
    SET value = excluded.value, updated_at = CURRENT_TIMESTAMP""",
    (key, value)
  )
  conn.commit()
