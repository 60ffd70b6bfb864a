"""System clipboard access via pbpaste/pbcopy."""

import subprocess


class ClipboardError(Exception):
    """Raised when pbcopy/pbpaste cannot be run."""


def read_clipboard() -> str:
    try:
        proc = subprocess.run(["pbpaste"], capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ClipboardError(f"pbpaste failed: {exc}") from exc
    return proc.stdout


def write_clipboard(text: str) -> None:
    try:
        subprocess.run(["pbcopy"], input=text, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ClipboardError(f"pbcopy failed: {exc}") from exc
