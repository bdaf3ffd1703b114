"""File utilities for writing generated application files."""
from pathlib import Path
from typing import List, Optional, Tuple

from appgen.utils.logging import get_logger

LOGGER = get_logger(__name__)


def ensure_app_dir(app_root: Path) -> Optional[str]:
    """Create the application output directory. Returns an error description on failure."""
    try:
        app_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        LOGGER.error("Cannot create application directory %s: %s", app_root, e)
        return str(e)
    return None


def resolve_output_path(app_root: Path, relative_path: str) -> Path:
    return app_root / relative_path


def ensure_parent_dir(file_path: Path) -> Optional[str]:
    """Create all missing parents of file_path. Returns an error description on failure."""
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        LOGGER.error("Cannot create directory %s: %s", file_path.parent, e)
        return str(e)
    return None


class FileOperation:
    """Outcome of materializing one file."""

    def __init__(self, path: Path, message: str, directory_error: Optional[str] = None):
        self.path = path
        self.message = message
        # Set when the parent directory could not be created; nothing was written.
        self.directory_error = directory_error


def materialize_file(app_root: Path, relative_path: str, content: str) -> FileOperation:
    """Write content to app_root/relative_path, replacing whatever was there.

    The outcome is returned as data; I/O errors never propagate.
    """
    file_path = resolve_output_path(app_root, relative_path)

    root = app_root.resolve()
    full_path = file_path.resolve()
    if full_path != root and root not in full_path.parents:
        LOGGER.error("Path traversal detected: %s not in %s", full_path, root)
        return FileOperation(
            file_path, f"Error creating/updating file {file_path}: path is outside {app_root}"
        )

    error = ensure_parent_dir(file_path)
    if error is not None:
        return FileOperation(
            file_path, f"Error creating/updating file {file_path}: {error}", directory_error=error
        )

    try:
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        LOGGER.error("Failed to write %s: %s", file_path, e)
        return FileOperation(file_path, f"Error creating/updating file {file_path}: {e}")

    LOGGER.info("File saved: %s (%d bytes)", file_path, len(content))
    return FileOperation(file_path, f"Created/Updated file: {file_path}")


def list_directory(root: Path, relative_dir: str = "") -> Optional[List[Tuple[str, bool]]]:
    """List (name, is_dir) pairs of a directory below root, dirs first.

    Returns None when the directory does not exist or lies outside root.
    Hidden entries are skipped.
    """
    base = root.resolve()
    target = (root / relative_dir).resolve()
    if target != base and base not in target.parents:
        LOGGER.warning("Refusing to list %s outside %s", target, base)
        return None
    if not target.is_dir():
        return None

    entries = [
        (child.name, child.is_dir())
        for child in target.iterdir()
        if not child.name.startswith(".")
    ]
    return sorted(entries, key=lambda e: (not e[1], e[0]))
