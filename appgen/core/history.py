from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from appgen.utils.logging import get_logger
from appgen.utils.schemas import GenerationHistory, HistoryEntry

LOGGER = get_logger(__name__)


def write_history(path: Path, entries: Sequence[HistoryEntry], app_directory: str) -> Optional[str]:
    """Persist the run history as pretty-printed JSON.

    Returns an error description instead of raising so a failed write never
    stops the run from completing.
    """
    history = GenerationHistory(iterations=list(entries), app_directory=app_directory)
    try:
        path.write_text(history.model_dump_json(indent=2), encoding="utf-8")
    except OSError as e:
        LOGGER.error("Failed to write history file %s: %s", path, e)
        return str(e)

    LOGGER.info("History written: %s (%d entries)", path, len(entries))
    return None


def load_history(path: Path) -> GenerationHistory:
    return GenerationHistory.model_validate_json(path.read_text(encoding="utf-8"))
