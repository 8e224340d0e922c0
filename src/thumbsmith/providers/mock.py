"""Mock provider for local development and tests.

Returns a deterministic placeholder URL derived from the prompt instead of
calling a real generation API. Costs nothing and never fails.
"""

from __future__ import annotations

import hashlib

from thumbsmith.models.domain import ProviderResult
from thumbsmith.providers.base import ProviderBase

PLACEHOLDER_BASE_URL = "https://placehold.co/1792x1024/png"

# Recent prompts kept for inspection; older ones are dropped
MAX_RECORDED_PROMPTS = 100


class MockProvider(ProviderBase):
    """Provider that echoes a stable URL per prompt."""

    name = "mock"

    def __init__(self, base_url: str = PLACEHOLDER_BASE_URL):
        self.base_url = base_url
        self.prompts: list[str] = []

    def _prompt_digest(self, prompt: str) -> str:
        """Short stable hash of the prompt text."""
        return hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:16]

    def generate(self, prompt: str) -> ProviderResult:
        self.prompts.append(prompt)
        del self.prompts[:-MAX_RECORDED_PROMPTS]
        return ProviderResult(
            image_url=f"{self.base_url}?text={self._prompt_digest(prompt)}",
            revised_prompt=None,
            latency_ms=0,
        )
