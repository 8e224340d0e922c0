"""Styles API endpoint.

GET /api/styles - List available thumbnail styles
"""

from __future__ import annotations

from fastapi import APIRouter

from thumbsmith.core.prompt import STYLE_CATALOG
from thumbsmith.models.types import StyleOption

router = APIRouter()


@router.get("/styles", response_model=list[StyleOption])
def list_styles() -> list[StyleOption]:
    """Return the style catalog in display order."""
    return [StyleOption(**style) for style in STYLE_CATALOG]
