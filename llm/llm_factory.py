"""Generator provider factory."""

from __future__ import annotations

from typing import Any

from llm.base_llm import BaseLLM
from llm.local.ollama_provider import OllamaProvider
from llm.providers.mock_provider import MockProvider
from llm.providers.openai_provider import OpenAIProvider

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


def build_llm(config: dict[str, Any]) -> BaseLLM | None:
    """Build a generator from configuration; "none" disables generation entirely."""
    models_cfg = config.get("models", {}).get("llm", {})
    active = models_cfg.get("active_provider", "mock")
    providers = models_cfg.get("providers", {})
    active_cfg = providers.get(active, {})
    provider_type = active_cfg.get("type", active)
    timeout_s = float(active_cfg.get("timeout_s", 30.0))

    if provider_type in (None, "none"):
        return None
    if provider_type == "ollama":
        return OllamaProvider(model=active_cfg.get("model", "gemma2:2b"), timeout_s=timeout_s)
    if provider_type == "openai":
        return OpenAIProvider(
            model=active_cfg.get("model", "gpt-4o-mini"),
            base_url=active_cfg.get("base_url"),
            api_key_env=active_cfg.get("api_key_env", "OPENAI_API_KEY"),
            timeout_s=timeout_s,
        )
    if provider_type == "groq":
        return OpenAIProvider(
            model=active_cfg.get("model", "llama-3.3-70b-versatile"),
            base_url=active_cfg.get("base_url", GROQ_BASE_URL),
            api_key_env=active_cfg.get("api_key_env", "GROQ_API_KEY"),
            timeout_s=timeout_s,
        )
    return MockProvider()
