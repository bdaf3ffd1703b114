from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from appgen.settings import get_settings


class BaseLLMAdapter(ABC):
    @abstractmethod
    async def acomplete(self, prompt: str) -> str:
        """Return the model's raw text for prompt; raise on any backend failure."""


_cached_adapter: Optional[BaseLLMAdapter] = None


def get_llm_adapter() -> BaseLLMAdapter:
    global _cached_adapter
    if _cached_adapter:
        return _cached_adapter

    settings = get_settings()
    if settings.llm_mode == "mock":
        from .mock_adapter import MockLLMAdapter
        _cached_adapter = MockLLMAdapter()

    elif settings.llm_mode == "ollama_cli":
        from .ollama_cli_adapter import OllamaCLIAdapter
        _cached_adapter = OllamaCLIAdapter(model=settings.ollama_model)

    else:  # ollama
        from .ollama_adapter import OllamaLLMAdapter
        _cached_adapter = OllamaLLMAdapter(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            timeout=settings.ollama_timeout,
        )

    return _cached_adapter


def reset_llm_adapter() -> None:
    global _cached_adapter
    _cached_adapter = None
