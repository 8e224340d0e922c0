"""Domain models for Thumbsmith.

Plain dataclasses passed between the gateway, the quota store and the
provider adapter. Independent of FastAPI and SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ============================================================================
# Request Domain
# ============================================================================

Style = Literal["business", "education", "entertainment", "tech", "lifestyle", "news"]

STYLES: tuple[Style, ...] = (
    "business",
    "education",
    "entertainment",
    "tech",
    "lifestyle",
    "news",
)

DEFAULT_STYLE: Style = "business"


@dataclass(frozen=True)
class GenerationRequest:
    """A validated, normalized generation request."""

    title: str
    style: Style = DEFAULT_STYLE
    keywords: str = ""


@dataclass(frozen=True)
class GenerationResult:
    """Successful gateway outcome."""

    image_url: str
    revised_prompt: str | None
    remaining_quota: int


# ============================================================================
# Quota Domain
# ============================================================================


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of an atomic check-and-consume."""

    allowed: bool
    remaining: int


# ============================================================================
# Provider Domain
# ============================================================================


@dataclass(frozen=True)
class ProviderResult:
    """Image returned by a provider adapter."""

    image_url: str
    revised_prompt: str | None = None
    latency_ms: int | None = None
