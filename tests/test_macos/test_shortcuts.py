"""Tests for ShortcutRunner — clipboard, launcher and sleep are all mocked."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from jobtrack.macos.applescript import AppleScriptError
from jobtrack.macos.clipboard import ClipboardError
from jobtrack.macos.shortcuts import (
    CHECK_JOB_EMAILS,
    PARSE_JOB,
    ShortcutError,
    ShortcutRunner,
    ShortcutSpec,
    shortcut_url,
)


# ── Helpers ────────────────────────────────────────────────────────────────────


def make_runner(*reads: object) -> tuple[ShortcutRunner, MagicMock, MagicMock, MagicMock, AsyncMock]:
    """Return (runner, read, write, launch, sleep); ``read`` yields ``reads`` in turn."""
    read = MagicMock(side_effect=list(reads))
    write = MagicMock()
    launch = MagicMock()
    sleep = AsyncMock()
    runner = ShortcutRunner(read=read, write=write, launch=launch, sleep=sleep)
    return runner, read, write, launch, sleep


# ── shortcut_url ───────────────────────────────────────────────────────────────


class TestShortcutUrl:
    def test_name_is_percent_encoded(self) -> None:
        assert shortcut_url("Parse Job") == "shortcuts://run-shortcut?name=Parse%20Job"


class TestSpecs:
    def test_parse_job_budget(self) -> None:
        assert PARSE_JOB.marker == "Role:"
        assert PARSE_JOB.interval * PARSE_JOB.max_attempts == pytest.approx(15.0)

    def test_check_emails_budget(self) -> None:
        assert CHECK_JOB_EMAILS.marker == "company"
        assert CHECK_JOB_EMAILS.interval * CHECK_JOB_EMAILS.max_attempts == pytest.approx(30.0)


# ── ShortcutRunner.run ─────────────────────────────────────────────────────────


class TestRun:
    async def test_clears_clipboard_then_launches(self) -> None:
        runner, _, write, launch, _ = make_runner("Role: Engineer")

        await runner.run(PARSE_JOB)

        write.assert_called_once_with("")
        launch.assert_called_once_with("shortcuts://run-shortcut?name=Parse%20Job")

    async def test_returns_first_content_with_marker(self) -> None:
        runner, read, _, _, sleep = make_runner("", "partial", "Role: Engineer\nCompany: Acme")

        result = await runner.run(PARSE_JOB)

        assert result == "Role: Engineer\nCompany: Acme"
        assert read.call_count == 3
        assert sleep.await_count == 3

    @pytest.mark.parametrize(
        ("spec", "text"),
        [
            (CHECK_JOB_EMAILS, "Company: Acme, Status: Interview"),
            (PARSE_JOB, "role: SWE\ncompany: Acme"),
        ],
    )
    async def test_marker_match_ignores_case(self, spec: ShortcutSpec, text: str) -> None:
        runner, read, _, _, _ = make_runner(text)

        result = await runner.run(spec)

        assert result == text
        assert read.call_count == 1

    async def test_gives_up_after_max_attempts(self) -> None:
        spec = ShortcutSpec(name="X", marker="Role:", interval=0.1, max_attempts=3)
        runner, read, _, _, sleep = make_runner("", "", "unrelated text")

        result = await runner.run(spec)

        assert result == "unrelated text"
        assert read.call_count == 3
        assert sleep.await_count == 3

    async def test_fixed_interval_by_default(self) -> None:
        spec = ShortcutSpec(name="X", marker="Role:", interval=0.5, max_attempts=3)
        runner, _, _, _, sleep = make_runner("", "", "")

        await runner.run(spec)

        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 0.5, 0.5]

    async def test_backoff_grows_the_interval(self) -> None:
        spec = ShortcutSpec(name="X", marker="Role:", interval=0.1, max_attempts=3)
        runner, _, _, _, sleep = make_runner("", "", "")

        await runner.run(spec, backoff=2.0)

        delays = [c.args[0] for c in sleep.await_args_list]
        assert delays == pytest.approx([0.1, 0.2, 0.4])

    async def test_clipboard_read_error_counts_as_empty(self) -> None:
        runner, _, _, _, _ = make_runner(ClipboardError("pbpaste failed"), "Role: Engineer")

        assert await runner.run(PARSE_JOB) == "Role: Engineer"

    async def test_launch_failure_raises_shortcut_error(self) -> None:
        runner, read, _, launch, _ = make_runner()
        launch.side_effect = AppleScriptError("open exited 1")

        with pytest.raises(ShortcutError, match="Parse Job"):
            await runner.run(PARSE_JOB)
        read.assert_not_called()

    async def test_clipboard_clear_failure_raises_shortcut_error(self) -> None:
        runner, _, write, launch, _ = make_runner()
        write.side_effect = ClipboardError("pbcopy failed")

        with pytest.raises(ShortcutError):
            await runner.run(PARSE_JOB)
        launch.assert_not_called()


# ── ShortcutRunner.trigger ─────────────────────────────────────────────────────


class TestTrigger:
    def test_launches_without_polling(self) -> None:
        runner, read, write, launch, _ = make_runner()

        runner.trigger(PARSE_JOB)

        launch.assert_called_once_with("shortcuts://run-shortcut?name=Parse%20Job")
        read.assert_not_called()
        write.assert_not_called()

    def test_launch_failure_is_not_raised(self) -> None:
        runner, _, _, launch, _ = make_runner()
        launch.side_effect = AppleScriptError("boom")

        runner.trigger(PARSE_JOB)  # should not raise
