"""Generator provider tests."""

from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

from llm.llm_factory import build_llm
from llm.local.ollama_provider import OllamaProvider
from llm.providers.mock_provider import MockProvider
from llm.providers.openai_provider import OpenAIProvider


def test_factory_defaults_to_mock() -> None:
    assert isinstance(build_llm({}), MockProvider)


def test_factory_none_disables_generation() -> None:
    config = {"models": {"llm": {"active_provider": "none"}}}

    assert build_llm(config) is None


def test_factory_builds_ollama_from_provider_entry() -> None:
    config = {
        "models": {
            "llm": {
                "active_provider": "local",
                "providers": {"local": {"type": "ollama", "model": "gemma2:9b", "timeout_s": 5}},
            }
        }
    }

    llm = build_llm(config)

    assert isinstance(llm, OllamaProvider)
    assert llm.model == "gemma2:9b"
    assert llm.timeout_s == 5.0


def test_mock_provider_is_deterministic() -> None:
    provider = MockProvider()
    prompt = 'Context\nUser says: "water the garden plants plants"\nRespond.'

    first = provider.generate(prompt)

    assert first == provider.generate(prompt)
    assert first == "Local assistant note: focusing on plants, water, garden."
    assert provider.generate("   ") is None


def test_ollama_returns_none_when_binary_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("llm.local.ollama_provider.shutil.which", lambda _: None)

    provider = OllamaProvider()

    assert provider.is_available() is False
    assert provider.generate("hello") is None


def test_ollama_passes_prompt_on_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls.append({"args": args, **kwargs})
        return subprocess.CompletedProcess(args, 0, stdout="  Sure thing.\n", stderr="")

    monkeypatch.setattr("llm.local.ollama_provider.shutil.which", lambda _: "/usr/bin/ollama")
    monkeypatch.setattr("llm.local.ollama_provider.subprocess.run", fake_run)

    assert OllamaProvider(model="tiny").generate("hi") == "Sure thing."
    assert calls[0]["args"] == ["ollama", "run", "tiny"]
    assert calls[0]["input"] == "hi"


def test_ollama_failure_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(args, 1)

    monkeypatch.setattr("llm.local.ollama_provider.shutil.which", lambda _: "/usr/bin/ollama")
    monkeypatch.setattr("llm.local.ollama_provider.subprocess.run", fake_run)

    assert OllamaProvider().generate("hi") is None


def test_factory_builds_groq_as_openai_compatible() -> None:
    config = {"models": {"llm": {"active_provider": "groq"}}}

    llm = build_llm(config)

    assert isinstance(llm, OpenAIProvider)
    assert llm.base_url == "https://api.groq.com/openai/v1"
    assert llm.api_key_env == "GROQ_API_KEY"


def test_openai_provider_without_key_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    provider = OpenAIProvider()

    assert provider.is_available() is False
    assert provider.generate("hi") is None


def test_openai_provider_sends_prompt_as_user_message(monkeypatch: pytest.MonkeyPatch) -> None:
    sent: dict[str, object] = {}

    class FakeCompletions:
        def create(self, **kwargs: object) -> SimpleNamespace:
            sent.update(kwargs)
            message = SimpleNamespace(content=" Pick up basil first. ")
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    class FakeClient:
        def __init__(self, **kwargs: object) -> None:
            sent["client"] = kwargs
            self.chat = SimpleNamespace(completions=FakeCompletions())

    monkeypatch.setenv("TEST_LLM_KEY", "secret")
    monkeypatch.setattr("llm.providers.openai_provider.OpenAI", FakeClient)

    provider = OpenAIProvider(model="small", api_key_env="TEST_LLM_KEY")

    assert provider.generate("hello") == "Pick up basil first."
    assert sent["model"] == "small"
    assert sent["messages"] == [{"role": "user", "content": "hello"}]
    assert sent["client"]["api_key"] == "secret"
