"""Local key/value preferences — the only state jobtrack keeps on disk."""

import json
import logging
import sqlite3
from pathlib import Path

from jobtrack.storage.models import ALL_TABLES

logger = logging.getLogger(__name__)

DEFAULT_PREFS_PATH = Path.home() / ".jobtrack" / "preferences.db"

#: Re-run the "Parse Job" shortcut every time the intake form opens.
AUTO_REFRESH_KEY = "autoRefresh"
AUTO_REFRESH_DEFAULT = True


class PreferenceStore:
    """Wraps a one-table SQLite file of JSON-encoded preference values.

    Read once when a command starts and written when the user toggles a
    setting; nothing else is persisted locally.

    Usage::

        prefs = PreferenceStore()
        if prefs.get_bool(AUTO_REFRESH_KEY, AUTO_REFRESH_DEFAULT):
            ...
        prefs.set_bool(AUTO_REFRESH_KEY, False)
    """

    def __init__(self, path: str | Path = DEFAULT_PREFS_PATH) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._path))
        self._conn.row_factory = sqlite3.Row
        self._create_tables()

    def close(self) -> None:
        """Close the underlying database connection."""
        self._conn.close()

    def get_bool(self, key: str, default: bool) -> bool:
        """Return a stored boolean, or ``default`` when unset or not a boolean."""
        row = self._conn.execute(
            "SELECT value FROM preferences WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return default
        try:
            value = json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable preference %r", key)
            return default
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO preferences (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value      = excluded.value,
                    updated_at = datetime('now')
                """,
                (key, json.dumps(bool(value))),
            )
        logger.debug("Preference %s = %s", key, value)

    def _create_tables(self) -> None:
        with self._conn:
            for ddl in ALL_TABLES:
                self._conn.execute(ddl)
