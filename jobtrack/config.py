"""Runtime settings, read from the environment (and .env via python-dotenv)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from jobtrack.macos.browser import DEFAULT_BROWSER
from jobtrack.storage.prefs import DEFAULT_PREFS_PATH


class ConfigError(Exception):
    """Raised when a required setting is missing."""


@dataclass(frozen=True)
class Settings:
    """Everything the commands need to reach Notion, the browser and the disk."""

    notion_token: str = ""
    database_id: str = ""
    database_url: str = ""
    resume_folder: str = ""
    browser_app: str = DEFAULT_BROWSER
    prefs_path: Path = DEFAULT_PREFS_PATH

    @classmethod
    def from_env(cls) -> Settings:
        """Build Settings from environment variables."""
        prefs = os.environ.get("JOBTRACK_PREFS_PATH", "").strip()
        return cls(
            notion_token=os.environ.get("NOTION_TOKEN", "").strip(),
            database_id=os.environ.get("NOTION_DATABASE_ID", "").strip(),
            database_url=os.environ.get("NOTION_DATABASE_URL", "").strip(),
            resume_folder=os.environ.get("RESUME_FOLDER", "").strip(),
            browser_app=os.environ.get("JOBTRACK_BROWSER", "").strip() or DEFAULT_BROWSER,
            prefs_path=Path(prefs).expanduser() if prefs else DEFAULT_PREFS_PATH,
        )

    def require_notion(self) -> None:
        """Raise ConfigError unless both Notion credentials are configured."""
        missing = [
            name
            for name, value in (
                ("NOTION_TOKEN", self.notion_token),
                ("NOTION_DATABASE_ID", self.database_id),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing setting(s): {', '.join(missing)}")
