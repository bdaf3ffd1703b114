"""Generation plan: the ordered list of files produced for every request.

Order matters. Files are generated one after another, from the application
entry point down to the dependency manifest, so the layout reads the same way
the model is asked to build it.
"""

from __future__ import annotations

import json
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from appgen.utils.logging import get_logger
from appgen.utils.schemas import FileSpecEntry

LOGGER = get_logger(__name__)


# ---------------------------------------------------------------------------
# Default plan (Flask application)
# ---------------------------------------------------------------------------

DEFAULT_FILE_SPECS: List[FileSpecEntry] = [
    FileSpecEntry(
        file_name="app.py",
        instruction="Create or update the main Flask application file (app.py) with necessary imports and app initialization.",
    ),
    FileSpecEntry(
        file_name="config.py",
        instruction="Create or update the configuration file (config.py) with any necessary settings.",
    ),
    FileSpecEntry(
        file_name="models.py",
        instruction="Create or update the models file (models.py) with any database models the application might need.",
    ),
    FileSpecEntry(
        file_name="routes.py",
        instruction="Create or update the routes file (routes.py) with all the necessary route handlers.",
    ),
    FileSpecEntry(
        file_name="forms.py",
        instruction="Create or update the forms file (forms.py) with any form classes the application might use.",
    ),
    FileSpecEntry(
        file_name="templates/index.html",
        instruction="Create or update the HTML template for the main page.",
    ),
    FileSpecEntry(
        file_name="templates/layout.html",
        instruction="Create or update the base layout HTML template.",
    ),
    FileSpecEntry(
        file_name="static/style.css",
        instruction="Create or update the CSS file for styling the application.",
    ),
    FileSpecEntry(
        file_name="requirements.txt",
        instruction="Create or update the requirements.txt file listing all necessary Python packages.",
    ),
]

_SPEC_LIST = TypeAdapter(List[FileSpecEntry])


def validate_file_specs(specs: Sequence[FileSpecEntry]) -> List[FileSpecEntry]:
    """Reject empty plans, duplicate names and paths leaving the app root."""
    if not specs:
        raise ValueError("File specification table is empty")

    seen = set()
    for entry in specs:
        path = PurePosixPath(entry.file_name)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError(f"File name must be a relative path inside the app: {entry.file_name}")
        if entry.file_name in seen:
            raise ValueError(f"Duplicate file name in specification: {entry.file_name}")
        seen.add(entry.file_name)
    return list(specs)


def load_file_specs(path: Optional[Path] = None) -> List[FileSpecEntry]:
    """Load the plan from a JSON file, or return the default Flask plan.

    The file holds a list of ``{"file_name": ..., "instruction": ...}`` objects.
    """
    if path is None:
        return list(DEFAULT_FILE_SPECS)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        specs = _SPEC_LIST.validate_python(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Invalid file specification table {path}: {e}") from e

    LOGGER.info("Loaded %d file specs from %s", len(specs), path)
    return validate_file_specs(specs)
