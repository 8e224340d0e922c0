"""Request validation for POST /api/generate.

Turns a raw JSON body into a GenerationRequest or raises GatewayError with
one of the 400-class kinds. An unknown style is not an error; it degrades to
the default style.
"""

from __future__ import annotations

import json

from thumbsmith.core.errors import ErrorKind, GatewayError
from thumbsmith.models.domain import DEFAULT_STYLE, STYLES, GenerationRequest, Style

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
KEYWORDS_MAX_LENGTH = 100


def normalize_style(value: object) -> Style:
    """Return value if it names a known style, else the default style."""
    if isinstance(value, str) and value in STYLES:
        return value  # type: ignore[return-value]
    return DEFAULT_STYLE


def _optional_str(body: dict, field: str) -> str | None:
    value = body.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise GatewayError(ErrorKind.MALFORMED_REQUEST, f"'{field}' must be a string.")
    return value


def validate(raw_body: bytes | str) -> GenerationRequest:
    """Parse and validate a generation request body.

    Args:
        raw_body: Request body as received.

    Returns:
        GenerationRequest with trimmed title/keywords and a normalized style.

    Raises:
        GatewayError: MalformedRequest, TitleTooShort, TitleTooLong or
            KeywordsTooLong.
    """
    try:
        body = json.loads(raw_body)
    except (ValueError, TypeError, RecursionError) as e:
        # Deeply nested bodies raise RecursionError
        raise GatewayError(ErrorKind.MALFORMED_REQUEST) from e

    if not isinstance(body, dict):
        raise GatewayError(ErrorKind.MALFORMED_REQUEST)

    title = _optional_str(body, "videoTitle")
    keywords = _optional_str(body, "keywords") or ""

    if title is None or len(title.strip()) < TITLE_MIN_LENGTH:
        raise GatewayError(ErrorKind.TITLE_TOO_SHORT)

    # Upper bound applies to the title as submitted, before trimming
    if len(title) > TITLE_MAX_LENGTH:
        raise GatewayError(ErrorKind.TITLE_TOO_LONG)

    if len(keywords) > KEYWORDS_MAX_LENGTH:
        raise GatewayError(ErrorKind.KEYWORDS_TOO_LONG)

    return GenerationRequest(
        title=title.strip(),
        style=normalize_style(body.get("style")),
        keywords=keywords.strip(),
    )
