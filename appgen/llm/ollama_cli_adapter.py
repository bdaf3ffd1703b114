from __future__ import annotations

import asyncio

from appgen.utils.logging import get_logger

from .adapter import BaseLLMAdapter

LOGGER = get_logger(__name__)


class OllamaCLIAdapter(BaseLLMAdapter):
    """Runs `ollama run <model>` and feeds the prompt on stdin."""

    def __init__(self, model: str = "llama3.2"):
        self.model = model

    async def acomplete(self, prompt: str) -> str:
        LOGGER.info("Calling Ollama CLI with model '%s'", self.model)

        cmd = ["ollama", "run", self.model]
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            LOGGER.error("Cannot start Ollama CLI: %s", exc)
            raise RuntimeError(f"Cannot start ollama: {exc}") from exc

        stdout, stderr = await process.communicate(prompt.encode("utf-8"))
        if process.returncode != 0:
            error_msg = stderr.decode("utf-8", errors="replace")
            LOGGER.error("Ollama failed: %s", error_msg)
            raise RuntimeError(f"Ollama exited with {process.returncode}: {error_msg}")

        result = stdout.decode("utf-8", errors="replace")
        if not result.strip():
            LOGGER.warning("Ollama returned empty response.")
            raise RuntimeError("Empty response from Ollama")

        LOGGER.info("Ollama response received (length=%d)", len(result))
        return result
