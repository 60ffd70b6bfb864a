"""Read the active tab URL from a scriptable browser."""

import logging

from jobtrack.macos.applescript import AppleScriptError, run_osascript

logger = logging.getLogger(__name__)

DEFAULT_BROWSER = "Comet"

_ACTIVE_TAB_SCRIPT = """
on run argv
    tell application (item 1 of argv) to return URL of active tab of front window
end run
"""


class BrowserUnavailableError(Exception):
    """The browser is not running, has no window, or returned no URL."""


def get_active_tab_url(browser_app: str = DEFAULT_BROWSER) -> str:
    """Return the URL of the front window's active tab in ``browser_app``."""
    try:
        url = run_osascript(_ACTIVE_TAB_SCRIPT, browser_app)
    except AppleScriptError as exc:
        logger.debug("Active tab lookup failed for %s: %s", browser_app, exc)
        raise BrowserUnavailableError(
            f"Could not get browser URL. Make sure {browser_app} is open with a tab."
        ) from exc

    if not url.strip():
        raise BrowserUnavailableError(
            f"Could not get browser URL. Make sure {browser_app} is open with a tab."
        )
    return url.strip()
