"""Image-generation provider adapters."""

from __future__ import annotations

from thumbsmith.config import Settings
from thumbsmith.providers.base import ProviderBase
from thumbsmith.providers.mock import MockProvider
from thumbsmith.providers.openai_images import OpenAIImagesProvider


def build_provider(settings: Settings) -> ProviderBase | None:
    """Create the provider selected by settings.

    Returns None when the OpenAI provider is selected without a credential;
    the gateway reports that as ServiceMisconfigured per request.
    """
    if settings.IMAGE_PROVIDER == "mock":
        return MockProvider()

    if not settings.OPENAI_API_KEY:
        return None

    return OpenAIImagesProvider(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.IMAGE_MODEL,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )


__all__ = ["MockProvider", "OpenAIImagesProvider", "ProviderBase", "build_provider"]
