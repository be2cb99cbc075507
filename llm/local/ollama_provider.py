"""Ollama adapter for an on-device model."""

from __future__ import annotations

import logging
import shutil
import subprocess

from llm.base_llm import BaseLLM

logger = logging.getLogger("remindme.llm.ollama")


class OllamaProvider(BaseLLM):
    """Very small Ollama adapter that checks availability before use."""

    def __init__(self, model: str = "gemma2:2b", timeout_s: float = 30.0) -> None:
        self.model = model
        self.timeout_s = timeout_s

    def is_available(self) -> bool:
        return shutil.which("ollama") is not None

    def generate(self, prompt: str) -> str | None:
        if not self.is_available():
            logger.debug("Ollama binary not found; skipping generation")
            return None
        try:
            proc = subprocess.run(
                ["ollama", "run", self.model],
                input=prompt,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.SubprocessError) as exc:  # pragma: no cover - external binary path
            logger.warning("Ollama call failed: %s", exc)
            return None
        text = proc.stdout.strip()
        return text or None
