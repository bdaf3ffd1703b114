from __future__ import annotations

import threading

from appgen.utils.logging import get_logger
from appgen.utils.schemas import ProgressSnapshot, ProgressStatus

LOGGER = get_logger(__name__)


class ProgressStore:
    """Shared status record for the (single) generation job.

    Every read and write goes through one lock, held only for the field
    update itself. Readers get an immutable snapshot, never the live fields.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._status: ProgressStatus = "idle"
        self._iteration = 0
        self._max_iteration = 0
        self._output = ""
        self._completed = False

    def reset(self) -> None:
        with self._lock:
            self._status = "idle"
            self._iteration = 0
            self._max_iteration = 0
            self._output = ""
            self._completed = False

    def begin(self, max_iteration: int, message: str = "") -> None:
        with self._lock:
            self._status = "running"
            self._iteration = 0
            self._max_iteration = max_iteration
            self._output = message
            self._completed = False
        LOGGER.info("Generation started (%d steps)", max_iteration)

    def advance(self, step_index: int, message: str) -> None:
        with self._lock:
            self._iteration = step_index
            self._output += message

    def append(self, message: str) -> None:
        with self._lock:
            self._output += message

    def fail(self, message: str) -> None:
        # Errors are reported in the log text only; status is left alone.
        with self._lock:
            self._output += message
        LOGGER.warning("Generation error: %s", message.strip())

    def finish(self, message: str) -> None:
        with self._lock:
            self._status = "completed"
            self._completed = True
            self._output += message
        LOGGER.info("Generation completed")

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            return ProgressSnapshot(
                status=self._status,
                iteration=self._iteration,
                max_iteration=self._max_iteration,
                output=self._output,
                completed=self._completed,
            )
