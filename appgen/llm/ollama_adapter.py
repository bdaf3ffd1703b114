from __future__ import annotations

from typing import Optional

import httpx

from appgen.utils.logging import get_logger

from .adapter import BaseLLMAdapter

LOGGER = get_logger(__name__)


class OllamaLLMAdapter(BaseLLMAdapter):
    """Talks to a local Ollama server through its /api/generate endpoint."""

    def __init__(
        self,
        model: str = "llama3.2",
        base_url: str = "http://localhost:11434",
        timeout: float = 600.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def acomplete(self, prompt: str) -> str:
        LOGGER.info("Calling Ollama at %s with model '%s'", self.base_url, self.model)
        payload = {"model": self.model, "prompt": prompt, "stream": False}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post("/api/generate", json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            LOGGER.error("Ollama returned HTTP %s: %s", exc.response.status_code, exc.response.text[:200])
            raise RuntimeError(
                f"Ollama returned HTTP {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            LOGGER.error("Exception calling Ollama: %s", exc)
            raise RuntimeError(f"Ollama request failed: {exc}") from exc
        except ValueError as exc:
            raise RuntimeError(f"Ollama returned invalid JSON: {exc}") from exc

        if "error" in data:
            raise RuntimeError(f"Ollama error: {data['error']}")

        result = data.get("response") or ""
        LOGGER.info("Ollama response received (length=%d)", len(result))
        return result
