from __future__ import annotations

from .adapter import BaseLLMAdapter


class MockLLMAdapter(BaseLLMAdapter):
    """Offline backend: echoes the file instruction inside a fenced block."""

    async def acomplete(self, prompt: str) -> str:
        instruction = prompt.rsplit("\n\n", maxsplit=1)[-1].strip()
        return f"```\n# Mock output\n\n{instruction}\n```"
