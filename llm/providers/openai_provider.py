"""OpenAI-compatible chat endpoint adapter (OpenAI, Groq and similar hosts)."""

from __future__ import annotations

import logging
import os

from openai import OpenAI, OpenAIError

from llm.base_llm import BaseLLM

logger = logging.getLogger("remindme.llm.openai")


class OpenAIProvider(BaseLLM):
    """Chat-completions adapter. Works only when an API key is present."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        api_key_env: str = "OPENAI_API_KEY",
        timeout_s: float = 30.0,
    ) -> None:
        self.model = model
        self.base_url = base_url
        self.api_key_env = api_key_env
        self.timeout_s = timeout_s

    def is_available(self) -> bool:
        return bool(os.getenv(self.api_key_env))

    def generate(self, prompt: str) -> str | None:
        api_key = os.getenv(self.api_key_env)
        if not api_key:
            logger.debug("%s not set; skipping generation", self.api_key_env)
            return None
        try:
            client = OpenAI(api_key=api_key, base_url=self.base_url, timeout=self.timeout_s)
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as exc:  # pragma: no cover - external API path
            logger.warning("OpenAI-compatible call failed: %s", exc)
            return None
        content = response.choices[0].message.content
        return content.strip() if content and content.strip() else None
