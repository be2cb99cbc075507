"""Base interface for the optional text-generation collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Opaque prompt-to-text generator.

    Implementations may be slow or unavailable. Callers treat a None result
    as "enhancement unavailable" and keep their local answer.
    """

    @abstractmethod
    def generate(self, prompt: str) -> str | None:
        """Return generated text for a prompt, or None when nothing was produced."""

    def is_available(self) -> bool:
        return True
