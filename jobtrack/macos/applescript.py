"""Thin subprocess wrappers around osascript and open(1)."""

import logging
import subprocess

logger = logging.getLogger(__name__)

_OSASCRIPT_TIMEOUT_SECONDS = 30


class AppleScriptError(Exception):
    """Raised when osascript or open exits non-zero or cannot be started."""


def run_osascript(script: str, *args: str, timeout: float = _OSASCRIPT_TIMEOUT_SECONDS) -> str:
    """Run an AppleScript from stdin and return its stripped stdout.

    Extra ``args`` are passed through as ``argv`` for ``on run argv`` handlers.
    """
    logger.debug("osascript → %.120s", script.strip())
    try:
        proc = subprocess.run(
            ["osascript", "-", *args],
            input=script,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise AppleScriptError(f"osascript failed to run: {exc}") from exc

    if proc.returncode != 0:
        msg = (proc.stderr or proc.stdout).strip() or "unknown osascript error"
        raise AppleScriptError(msg)
    return proc.stdout.strip()


def open_url(url: str, *, background: bool = False) -> None:
    """Hand a URL to Launch Services; ``background`` keeps focus where it is."""
    cmd = ["open", "-g", url] if background else ["open", url]
    logger.debug("open → %s", url)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise AppleScriptError(f"open failed to run: {exc}") from exc
    if proc.returncode != 0:
        msg = (proc.stderr or proc.stdout).strip() or f"open exited {proc.returncode}"
        raise AppleScriptError(msg)
