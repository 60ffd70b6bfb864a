"""SQLite table schema for the local preference store."""

# ── DDL ────────────────────────────────────────────────────────────────────────

_CREATE_PREFERENCES = """
CREATE TABLE IF NOT EXISTS preferences (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
)
"""

#: All DDL statements in creation order.
ALL_TABLES: list[str] = [
    _CREATE_PREFERENCES,
]
