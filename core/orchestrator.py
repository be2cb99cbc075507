"""Top-level application wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.assistant import ConversationAssistant
from core.policy_runtime import configure_logging, load_effective_config
from llm.base_llm import BaseLLM
from llm.llm_factory import build_llm


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    llm: BaseLLM | None
    assistant: ConversationAssistant

    @property
    def due_soon_hours(self) -> float:
        return float(self.config.get("assistant", {}).get("due_soon_hours", 24))


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        configure_logging(config)
        llm = build_llm(config=config)
        assistant = ConversationAssistant(generator=llm)
        return RuntimeBundle(config=config, llm=llm, assistant=assistant)
