"""Gateway orchestration for one generation request.

Sequence, each step short-circuiting with a GatewayError:
1. Provider configured          -> ServiceMisconfigured (500)
2. Origin allowed               -> ForbiddenOrigin (403)
3. Quota check-and-consume      -> QuotaExceeded (429, remaining=0)
4. Body validation              -> MalformedRequest / TitleTooShort /
                                   TitleTooLong / KeywordsTooLong (400)
5. Prompt + provider call       -> ContentPolicyRejected (400) /
                                   ProviderUnavailable (502) /
                                   EmptyProviderResponse (500) /
                                   NetworkOrUnknown (500)
6. GenerationResult

Quota is charged at step 3, before the body is validated, and is not
refunded when a later step fails. A retry is a new request and pays again.
"""

from __future__ import annotations

import logging

from thumbsmith.core.errors import ErrorKind, GatewayError
from thumbsmith.core.identity import client_identity
from thumbsmith.core.origin import OriginGuard
from thumbsmith.core.prompt import build_prompt
from thumbsmith.core.validation import validate
from thumbsmith.models.domain import GenerationResult
from thumbsmith.providers.base import ProviderBase
from thumbsmith.quota.base import QuotaStore

logger = logging.getLogger(__name__)


class GenerationGateway:
    """Composes origin guard, quota store, validator and provider.

    Args:
        provider: Provider adapter, or None when no credential is configured.
        quota_store: Daily quota store.
        origin_guard: Origin allow-list check.
    """

    def __init__(
        self,
        provider: ProviderBase | None,
        quota_store: QuotaStore,
        origin_guard: OriginGuard,
    ):
        self.provider = provider
        self.quota_store = quota_store
        self.origin_guard = origin_guard

    @property
    def daily_limit(self) -> int:
        return self.quota_store.limit

    def handle(
        self,
        raw_body: bytes | str,
        origin: str | None = None,
        forwarded_for: str | None = None,
    ) -> GenerationResult:
        """Run one generation request through every gate.

        Args:
            raw_body: Request body as received.
            origin: Origin header value, if any.
            forwarded_for: X-Forwarded-For header value, if any.

        Returns:
            GenerationResult on success.

        Raises:
            GatewayError: On any failure; the kind selects the HTTP status.
        """
        if self.provider is None:
            logger.error("No image provider credential configured")
            raise GatewayError(ErrorKind.SERVICE_MISCONFIGURED)

        if not self.origin_guard.is_allowed(origin):
            logger.info(f"Rejected request from origin {origin!r}")
            raise GatewayError(ErrorKind.FORBIDDEN_ORIGIN)

        identity = client_identity(forwarded_for)
        decision = self.quota_store.check_and_consume(identity)
        if not decision.allowed:
            logger.info(f"Daily quota exhausted for {identity}")
            raise GatewayError(
                ErrorKind.QUOTA_EXCEEDED,
                f"You have used all {self.daily_limit} of today's free generations.",
                remaining=0,
            )

        remaining = decision.remaining

        try:
            request = validate(raw_body)
        except GatewayError as e:
            e.remaining = remaining
            raise

        prompt = build_prompt(request.title, request.style, request.keywords)

        try:
            provider_result = self.provider.generate(prompt)
        except GatewayError as e:
            e.remaining = remaining
            raise
        except Exception as e:
            logger.exception(f"Unexpected error calling {self.provider.name} provider")
            raise GatewayError(ErrorKind.NETWORK_OR_UNKNOWN, remaining=remaining) from e

        logger.info(
            f"Generated thumbnail for {identity} "
            f"(style={request.style}, remaining={remaining}, "
            f"latency_ms={provider_result.latency_ms})"
        )

        return GenerationResult(
            image_url=provider_result.image_url,
            revised_prompt=provider_result.revised_prompt,
            remaining_quota=remaining,
        )

    def remaining_for(self, forwarded_for: str | None) -> int:
        """Quota left for the caller, without consuming any."""
        return self.quota_store.peek(client_identity(forwarded_for))
