import asyncio
import json

import httpx
import pytest

from appgen import settings as settings_module
from appgen.llm import adapter as adapter_module
from appgen.llm.mock_adapter import MockLLMAdapter
from appgen.llm.ollama_adapter import OllamaLLMAdapter
from appgen.llm.ollama_cli_adapter import OllamaCLIAdapter


@pytest.fixture(autouse=True)
def clean_adapter_cache():
    adapter_module.reset_llm_adapter()
    settings_module.get_settings.cache_clear()
    yield
    adapter_module.reset_llm_adapter()
    settings_module.get_settings.cache_clear()


def test_ollama_adapter_posts_generate_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"model": "llama3.2", "response": "print('ok')", "done": True})

    adapter = OllamaLLMAdapter(
        model="llama3.2", base_url="http://ollama:11434/", transport=httpx.MockTransport(handler)
    )
    result = asyncio.run(adapter.acomplete("write code"))

    assert result == "print('ok')"
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert seen["body"] == {"model": "llama3.2", "prompt": "write code", "stream": False}


def test_ollama_adapter_raises_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'nope' not found"})

    adapter = OllamaLLMAdapter(model="nope", transport=httpx.MockTransport(handler))
    with pytest.raises(RuntimeError, match="HTTP 404"):
        asyncio.run(adapter.acomplete("hi"))


def test_ollama_adapter_raises_on_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = OllamaLLMAdapter(transport=httpx.MockTransport(handler))
    with pytest.raises(RuntimeError, match="connection refused"):
        asyncio.run(adapter.acomplete("hi"))


def test_ollama_adapter_raises_on_error_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "out of memory"})

    adapter = OllamaLLMAdapter(transport=httpx.MockTransport(handler))
    with pytest.raises(RuntimeError, match="out of memory"):
        asyncio.run(adapter.acomplete("hi"))


class _FakeProcess:
    def __init__(self, returncode, stdout=b"", stderr=b""):
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self.stdin_data = None

    async def communicate(self, data):
        self.stdin_data = data
        return self._stdout, self._stderr


def test_cli_adapter_feeds_prompt_on_stdin(monkeypatch):
    calls = {}
    process = _FakeProcess(0, stdout=b"body {}\n")

    async def fake_exec(*cmd, **kwargs):
        calls["cmd"] = cmd
        return process

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    result = asyncio.run(OllamaCLIAdapter(model="llama3.2").acomplete("style it"))

    assert result == "body {}\n"
    assert calls["cmd"] == ("ollama", "run", "llama3.2")
    assert process.stdin_data == b"style it"


def test_cli_adapter_raises_on_non_zero_exit(monkeypatch):
    async def fake_exec(*cmd, **kwargs):
        return _FakeProcess(1, stderr=b"pull model manifest: file does not exist")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    with pytest.raises(RuntimeError, match="exited with 1"):
        asyncio.run(OllamaCLIAdapter().acomplete("hi"))


def test_cli_adapter_raises_on_empty_output(monkeypatch):
    async def fake_exec(*cmd, **kwargs):
        return _FakeProcess(0, stdout=b"  \n")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    with pytest.raises(RuntimeError, match="Empty response"):
        asyncio.run(OllamaCLIAdapter().acomplete("hi"))


def test_cli_adapter_raises_when_binary_missing(monkeypatch):
    async def fake_exec(*cmd, **kwargs):
        raise FileNotFoundError("ollama")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    with pytest.raises(RuntimeError, match="Cannot start ollama"):
        asyncio.run(OllamaCLIAdapter().acomplete("hi"))


def test_mock_adapter_echoes_instruction():
    result = asyncio.run(MockLLMAdapter().acomplete("context\n\nCreate the layout."))
    assert result == "```\n# Mock output\n\nCreate the layout.\n```"


@pytest.mark.parametrize(
    "mode, expected",
    [("mock", MockLLMAdapter), ("ollama", OllamaLLMAdapter), ("ollama_cli", OllamaCLIAdapter)],
)
def test_factory_selects_adapter(monkeypatch, mode, expected):
    monkeypatch.setenv("LLM_MODE", mode)
    monkeypatch.setenv("OLLAMA_MODEL", "codellama")

    adapter = adapter_module.get_llm_adapter()

    assert isinstance(adapter, expected)
    assert adapter_module.get_llm_adapter() is adapter
    if mode != "mock":
        assert adapter.model == "codellama"
