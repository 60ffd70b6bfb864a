"""Run Apple Shortcuts and collect their output from the clipboard.

Shortcuts launched through the ``shortcuts://`` URL scheme cannot return a
value to the caller, so the two shortcuts this tool relies on copy their
result to the clipboard instead. ``ShortcutRunner.run`` wraps that
rendezvous as one bounded request/response call: clear the clipboard,
launch, poll until recognisable content appears or the attempt cap is hit.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from urllib.parse import quote

from jobtrack.macos.applescript import AppleScriptError, open_url
from jobtrack.macos.clipboard import ClipboardError, read_clipboard, write_clipboard

logger = logging.getLogger(__name__)


class ShortcutError(Exception):
    """Raised when a shortcut cannot be launched or the clipboard is unusable."""


@dataclass(frozen=True)
class ShortcutSpec:
    """How to run one named shortcut and recognise its clipboard output."""

    name: str
    marker: str           # case-insensitive substring that proves the result is written
    interval: float       # seconds between clipboard polls
    max_attempts: int


# 150 × 0.1 s = 15 s for the single-page job parser.
PARSE_JOB = ShortcutSpec(name="Parse Job", marker="Role:", interval=0.1, max_attempts=150)
# 60 × 0.5 s = 30 s; the email classifier reads a whole inbox window.
CHECK_JOB_EMAILS = ShortcutSpec(
    name="Check Job Emails", marker="company", interval=0.5, max_attempts=60
)


def shortcut_url(name: str) -> str:
    return f"shortcuts://run-shortcut?name={quote(name)}"


class ShortcutRunner:
    """Launches shortcuts in the background and polls the clipboard for results.

    Collaborators are injectable so the polling loop can be exercised
    without macOS::

        runner = ShortcutRunner()
        text = await runner.run(PARSE_JOB)
    """

    def __init__(
        self,
        *,
        read: Callable[[], str] = read_clipboard,
        write: Callable[[str], None] = write_clipboard,
        launch: Callable[[str], None] = lambda url: open_url(url, background=True),
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._read = read
        self._write = write
        self._launch = launch
        self._sleep = sleep

    async def run(self, spec: ShortcutSpec, *, backoff: float = 1.0) -> str:
        """Run ``spec`` and return the clipboard content it produced.

        Polls every ``spec.interval`` seconds (scaled by ``backoff`` after each
        attempt) up to ``spec.max_attempts`` times. When the cap is reached the
        current clipboard is returned as-is, which may be empty: callers treat
        a timeout and an empty result the same way.

        Raises:
            ShortcutError: if the clipboard cannot be cleared or the shortcut
                cannot be launched.
        """
        try:
            await asyncio.to_thread(self._write, "")
            await asyncio.to_thread(self._launch, shortcut_url(spec.name))
        except (ClipboardError, AppleScriptError) as exc:
            raise ShortcutError(f"Could not run shortcut {spec.name!r}: {exc}") from exc

        logger.info("Shortcut %r launched; polling clipboard", spec.name)
        delay = spec.interval
        content = ""
        for attempt in range(1, spec.max_attempts + 1):
            await self._sleep(delay)
            content = await self._read_quietly()
            if content.strip() and spec.marker.lower() in content.lower():
                logger.info("Shortcut %r answered after %d poll(s)", spec.name, attempt)
                return content
            delay *= backoff

        logger.warning(
            "Shortcut %r produced no recognisable output after %d polls",
            spec.name,
            spec.max_attempts,
        )
        return content

    def trigger(self, spec: ShortcutSpec) -> None:
        """Launch a shortcut without waiting for it. Failures are only logged."""
        try:
            self._launch(shortcut_url(spec.name))
        except AppleScriptError as exc:
            logger.error("Failed to trigger shortcut %r: %s", spec.name, exc)

    async def _read_quietly(self) -> str:
        """Read the clipboard; a transient pbpaste failure counts as empty."""
        try:
            return await asyncio.to_thread(self._read)
        except ClipboardError as exc:
            logger.debug("Clipboard read failed: %s", exc)
            return ""
