"""Resume folder helpers: list PDFs and archive newly dropped files."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_RESUME_FOLDER = Path("~/Documents/Resumes")


def resolve_resume_folder(folder: str | None = None) -> Path:
    """Expand ``~`` in the configured folder; default ~/Documents/Resumes."""
    return Path(folder).expanduser() if folder else _DEFAULT_RESUME_FOLDER.expanduser()


def list_resumes(folder: str | Path | None) -> list[str]:
    """Return the PDF file names in ``folder`` sorted by name; [] if it is absent."""
    if not folder:
        return []
    path = Path(folder).expanduser()
    if not path.is_dir():
        return []
    try:
        return sorted(
            entry.name
            for entry in path.iterdir()
            if entry.is_file() and entry.name.lower().endswith(".pdf")
        )
    except OSError as exc:
        logger.warning("Could not list resumes in %s: %s", path, exc)
        return []


def import_resume(source: str | Path, folder: Path) -> tuple[str, bool]:
    """Copy ``source`` into ``folder`` unless a file of that name is already there.

    Creates the folder when needed. Returns ``(file_name, copied)``.
    """
    source_path = Path(source).expanduser()
    folder.mkdir(parents=True, exist_ok=True)
    destination = folder / source_path.name
    if destination.exists():
        logger.info("Resume %s already archived", source_path.name)
        return source_path.name, False
    shutil.copyfile(source_path, destination)
    logger.info("Copied resume %s → %s", source_path, destination)
    return source_path.name, True
