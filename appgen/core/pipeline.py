from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Set

from appgen.core.file_specs import DEFAULT_FILE_SPECS
from appgen.core.history import write_history
from appgen.core.progress import ProgressStore
from appgen.core.prompts import build_file_prompt, build_instruction_context
from appgen.llm.adapter import BaseLLMAdapter
from appgen.utils import fileutils
from appgen.utils.logging import get_logger
from appgen.utils.sanitizer import strip_code_fences
from appgen.utils.schemas import FileSpecEntry, HistoryEntry

LOGGER = get_logger(__name__)


class GenerationPipeline:
    """Generates the files of one application, one model call per file.

    Steps run strictly in order. A failing step is recorded in the progress
    output and skipped; only an uncreatable output directory aborts the run.
    """

    def __init__(
        self,
        progress: ProgressStore,
        adapter: BaseLLMAdapter,
        app_root: Path,
        *,
        file_specs: Optional[Sequence[FileSpecEntry]] = None,
        step_delay: float = 1.0,
        history_filename: str = "generation_history.json",
        stack_name: str = "Python Flask",
        stack_version: str = "Flask v3",
    ) -> None:
        self.progress = progress
        self.adapter = adapter
        self.app_root = app_root
        self.file_specs: List[FileSpecEntry] = list(file_specs or DEFAULT_FILE_SPECS)
        self.step_delay = step_delay
        self.history_filename = history_filename
        self.stack_name = stack_name
        self.stack_version = stack_version
        self._tasks: Set[asyncio.Task[List[HistoryEntry]]] = set()

    @property
    def history_path(self) -> Path:
        return self.app_root / self.history_filename

    def start(self, user_input: str) -> asyncio.Task[List[HistoryEntry]]:
        """Launch a run in the background and return immediately."""
        task = asyncio.create_task(self.run(user_input))
        # Keep a strong reference until the task is done
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run(self, user_input: str) -> List[HistoryEntry]:
        dir_name = str(self.app_root)
        error = fileutils.ensure_app_dir(self.app_root)
        if error is not None:
            self.progress.fail(f"Error creating directory: {error}\n")
            return []

        LOGGER.info("Starting generation in %s: %s", dir_name, user_input[:100])
        self.progress.begin(len(self.file_specs), f"Using application directory: {dir_name}\n")

        context = build_instruction_context(user_input, self.stack_name, self.stack_version)
        history: List[HistoryEntry] = []

        for step, entry in enumerate(self.file_specs, start=1):
            await asyncio.sleep(self.step_delay)
            self.progress.advance(step, f"\nGenerating or updating {entry.file_name}...\n")

            record = await self._run_step(step, entry, context)
            if record is not None:
                history.append(record)

        error = write_history(self.history_path, history, dir_name)
        if error is not None:
            self.progress.fail(f"Error writing history file: {error}\n")

        self.progress.finish(
            f"\nFlask application generation/update completed! Files are in the '{dir_name}' directory.\n"
            "Redirecting to main page in 3 seconds..."
        )
        LOGGER.info(
            "Generation finished: %d of %d files written", len(history), len(self.file_specs)
        )
        return history

    async def _run_step(self, step: int, entry: FileSpecEntry, context: str) -> Optional[HistoryEntry]:
        prompt = build_file_prompt(context, entry)
        try:
            raw = await self.adapter.acomplete(prompt)
        except Exception as e:
            LOGGER.exception("Step %d (%s) failed", step, entry.file_name)
            self.progress.fail(f"Error in LLM interaction for {entry.file_name}: {e}\n")
            return None

        content = strip_code_fences(raw)
        operation = fileutils.materialize_file(self.app_root, entry.file_name, content)
        if operation.directory_error is not None:
            self.progress.fail(
                f"Error creating directory {operation.path.parent}: {operation.directory_error}\n"
            )
            return None

        self.progress.append(f"LLM Output for {entry.file_name}:\n{content}\n")
        self.progress.append(f"File operation: {operation.message}\n")

        return HistoryEntry(
            step=step,
            file_name=entry.file_name,
            file_operation=operation.message,
            file_content=content,
        )
