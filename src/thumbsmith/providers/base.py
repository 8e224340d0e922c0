"""Base provider interface.

Provider adapter: narrow interface `generate(prompt) -> ProviderResult`.
Adapters hold no quota or identity state and never retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from thumbsmith.models.domain import ProviderResult


class ProviderBase(ABC):
    """Abstract base class for image-generation providers.

    Failures are raised as GatewayError with a provider-related kind
    (ContentPolicyRejected, ProviderUnavailable, EmptyProviderResponse,
    NetworkOrUnknown).
    """

    name: str = "base"

    @abstractmethod
    def generate(self, prompt: str) -> ProviderResult:
        """Generate one thumbnail image for prompt.

        Args:
            prompt: Provider-agnostic prompt text.

        Returns:
            ProviderResult with the image URL.
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        return None
