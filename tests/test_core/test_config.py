"""Tests for Settings.from_env()."""

import inspect
from pathlib import Path

import pytest

from jobtrack.config import ConfigError, Settings
from jobtrack.storage.prefs import DEFAULT_PREFS_PATH, PreferenceStore

_ENV_VARS = (
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID",
    "NOTION_DATABASE_URL",
    "RESUME_FOLDER",
    "JOBTRACK_BROWSER",
    "JOBTRACK_PREFS_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    def test_defaults(self) -> None:
        settings = Settings.from_env()
        assert settings.notion_token == ""
        assert settings.browser_app == "Comet"
        assert settings.prefs_path == Path.home() / ".jobtrack" / "preferences.db"

    def test_values_are_read_and_stripped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTION_TOKEN", " secret_abc ")
        monkeypatch.setenv("NOTION_DATABASE_ID", "db123")
        monkeypatch.setenv("RESUME_FOLDER", "~/Resumes")
        monkeypatch.setenv("JOBTRACK_BROWSER", "Arc")
        monkeypatch.setenv("JOBTRACK_PREFS_PATH", "/tmp/jt/prefs.db")

        settings = Settings.from_env()

        assert settings.notion_token == "secret_abc"
        assert settings.database_id == "db123"
        assert settings.resume_folder == "~/Resumes"
        assert settings.browser_app == "Arc"
        assert settings.prefs_path == Path("/tmp/jt/prefs.db")

    def test_blank_browser_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOBTRACK_BROWSER", "   ")
        assert Settings.from_env().browser_app == "Comet"


class TestPrefsPath:
    def test_settings_and_store_share_one_default(self) -> None:
        assert Settings().prefs_path == DEFAULT_PREFS_PATH
        assert Settings.from_env().prefs_path == DEFAULT_PREFS_PATH

    def test_store_default_argument(self) -> None:
        default = inspect.signature(PreferenceStore).parameters["path"].default
        assert default is DEFAULT_PREFS_PATH


class TestRequireNotion:
    def test_missing_both(self) -> None:
        with pytest.raises(ConfigError, match="NOTION_TOKEN, NOTION_DATABASE_ID"):
            Settings().require_notion()

    def test_missing_database_id(self) -> None:
        with pytest.raises(ConfigError, match="NOTION_DATABASE_ID"):
            Settings(notion_token="t").require_notion()

    def test_complete(self) -> None:
        Settings(notion_token="t", database_id="d").require_notion()  # should not raise
