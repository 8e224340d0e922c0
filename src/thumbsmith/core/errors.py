"""Gateway error taxonomy.

Every failure the gateway can report is a GatewayError tagged with an
ErrorKind. The kind decides the HTTP status; the message is shown to the user.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to clients."""

    SERVICE_MISCONFIGURED = "ServiceMisconfigured"
    FORBIDDEN_ORIGIN = "ForbiddenOrigin"
    QUOTA_EXCEEDED = "QuotaExceeded"
    MALFORMED_REQUEST = "MalformedRequest"
    TITLE_TOO_SHORT = "TitleTooShort"
    TITLE_TOO_LONG = "TitleTooLong"
    KEYWORDS_TOO_LONG = "KeywordsTooLong"
    CONTENT_POLICY_REJECTED = "ContentPolicyRejected"
    PROVIDER_UNAVAILABLE = "ProviderUnavailable"
    EMPTY_PROVIDER_RESPONSE = "EmptyProviderResponse"
    NETWORK_OR_UNKNOWN = "NetworkOrUnknown"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.SERVICE_MISCONFIGURED: 500,
    ErrorKind.FORBIDDEN_ORIGIN: 403,
    ErrorKind.QUOTA_EXCEEDED: 429,
    ErrorKind.MALFORMED_REQUEST: 400,
    ErrorKind.TITLE_TOO_SHORT: 400,
    ErrorKind.TITLE_TOO_LONG: 400,
    ErrorKind.KEYWORDS_TOO_LONG: 400,
    ErrorKind.CONTENT_POLICY_REJECTED: 400,
    ErrorKind.PROVIDER_UNAVAILABLE: 502,
    ErrorKind.EMPTY_PROVIDER_RESPONSE: 500,
    ErrorKind.NETWORK_OR_UNKNOWN: 500,
}

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.SERVICE_MISCONFIGURED: "The image service is not configured.",
    ErrorKind.FORBIDDEN_ORIGIN: "Requests from this origin are not allowed.",
    ErrorKind.QUOTA_EXCEEDED: "You have used all of today's free generations.",
    ErrorKind.MALFORMED_REQUEST: "The request body is not valid JSON.",
    ErrorKind.TITLE_TOO_SHORT: "Please enter a video title of at least 3 characters.",
    ErrorKind.TITLE_TOO_LONG: "Video titles can be at most 200 characters.",
    ErrorKind.KEYWORDS_TOO_LONG: "Keywords can be at most 100 characters.",
    ErrorKind.CONTENT_POLICY_REJECTED: (
        "The request may violate the content policy. Please try different wording."
    ),
    ErrorKind.PROVIDER_UNAVAILABLE: (
        "Image generation failed upstream. Please try again later."
    ),
    ErrorKind.EMPTY_PROVIDER_RESPONSE: "Image generation failed.",
    ErrorKind.NETWORK_OR_UNKNOWN: "A server error occurred.",
}


class GatewayError(Exception):
    """A request failure that maps to a structured client response.

    Attributes:
        kind: Failure category.
        message: User-facing message.
        remaining: Quota remaining for the caller, when known.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        remaining: int | None = None,
    ):
        self.kind = kind
        self.message = message or kind.default_message
        self.remaining = remaining
        super().__init__(f"{kind.value}: {self.message}")

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_payload(self) -> dict:
        """Render the client-facing JSON body."""
        payload: dict = {"error": self.message}
        if self.remaining is not None:
            payload["remaining"] = self.remaining
        return payload


class QuotaStoreUnavailable(Exception):
    """Raised by a durable quota store when its backend cannot be reached."""
