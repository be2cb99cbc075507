"""Deterministic local generator for offline usage and tests."""

from __future__ import annotations

import re
from collections import Counter

from llm.base_llm import BaseLLM

_STOPWORDS = {"the", "and", "for", "with", "you", "your", "are", "this", "that", "user"}


class MockProvider(BaseLLM):
    """Rule-based stand-in used when no local model is configured."""

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        return [
            token
            for token in re.split(r"[^a-zA-Z0-9]+", text.lower())
            if len(token) > 2 and token not in _STOPWORDS
        ]

    @staticmethod
    def _summarize_tokens(tokens: list[str], max_items: int = 5) -> str:
        if not tokens:
            return "nothing in particular"
        top = Counter(tokens).most_common(max_items)
        return ", ".join(term for term, _ in top)

    @staticmethod
    def _quoted_user_text(prompt: str) -> str:
        match = re.search(r'User says: "(.*)"', prompt)
        return match.group(1) if match else ""

    def generate(self, prompt: str) -> str | None:
        """Produce a short deterministic reply; None for an empty prompt."""
        if not prompt.strip():
            return None
        if "milestones" in prompt.lower() and "one per line" in prompt.lower():
            goal = re.search(r"^Goal: (.+)$", prompt, flags=re.MULTILINE)
            title = goal.group(1).strip() if goal else "the goal"
            return "\n".join(
                [
                    f"1. Define what finishing {title} looks like",
                    "2. Block time on the calendar",
                    "3. Complete the first small step",
                ]
            )
        user_text = self._quoted_user_text(prompt)
        salient = self._summarize_tokens(self._tokenize(user_text or prompt))
        return f"Local assistant note: focusing on {salient}."
