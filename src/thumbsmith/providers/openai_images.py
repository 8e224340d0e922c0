"""OpenAI Images API adapter.

One synchronous POST to /images/generations per call. Fixed parameters: one
image, 1792x1024 landscape, standard quality, URL response format.
"""

from __future__ import annotations

import logging
import time

import httpx

from thumbsmith.core.errors import ErrorKind, GatewayError
from thumbsmith.models.domain import ProviderResult
from thumbsmith.providers.base import ProviderBase

logger = logging.getLogger(__name__)

CONTENT_POLICY_CODE = "content_policy_violation"

IMAGE_SIZE = "1792x1024"
IMAGE_QUALITY = "standard"


class OpenAIImagesProvider(ProviderBase):
    """Provider backed by the OpenAI image-generation endpoint.

    Args:
        api_key: Bearer credential.
        base_url: API base, e.g. https://api.openai.com/v1.
        model: Image model identifier.
        timeout: Seconds before the outbound call is abandoned.
        client: Optional pre-built httpx.Client (tests inject a MockTransport).
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "dall-e-3",
        timeout: float = 60.0,
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.client = client or httpx.Client(timeout=timeout)

    def _build_payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": IMAGE_SIZE,
            "quality": IMAGE_QUALITY,
            "response_format": "url",
        }

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Map a non-success response to a GatewayError."""
        try:
            error_data = response.json()
        except ValueError:
            error_data = {}

        logger.error(
            f"Image provider returned {response.status_code}: "
            f"{error_data or response.text[:500]}"
        )

        error = error_data.get("error") if isinstance(error_data, dict) else None
        code = error.get("code") if isinstance(error, dict) else None

        if response.status_code == 400 and code == CONTENT_POLICY_CODE:
            raise GatewayError(ErrorKind.CONTENT_POLICY_REJECTED)

        raise GatewayError(ErrorKind.PROVIDER_UNAVAILABLE)

    def generate(self, prompt: str) -> ProviderResult:
        start_time = time.time()

        try:
            response = self.client.post(
                f"{self.base_url}/images/generations",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self._build_payload(prompt),
            )
        except httpx.HTTPError as e:
            logger.error(f"Image provider request failed: {e}")
            raise GatewayError(ErrorKind.NETWORK_OR_UNKNOWN) from e

        if not response.is_success:
            self._raise_for_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(ErrorKind.EMPTY_PROVIDER_RESPONSE) from e

        results = data.get("data") if isinstance(data, dict) else None
        first = results[0] if isinstance(results, list) and results else {}
        image_url = first.get("url") if isinstance(first, dict) else None

        if not isinstance(image_url, str) or not image_url:
            logger.error("Image provider returned success without an image URL")
            raise GatewayError(ErrorKind.EMPTY_PROVIDER_RESPONSE)

        revised_prompt = first.get("revised_prompt")
        if not isinstance(revised_prompt, str):
            revised_prompt = None

        latency_ms = int((time.time() - start_time) * 1000)

        return ProviderResult(
            image_url=image_url,
            revised_prompt=revised_prompt,
            latency_ms=latency_ms,
        )

    def close(self) -> None:
        self.client.close()
