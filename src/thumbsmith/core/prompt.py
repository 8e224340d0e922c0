"""Prompt construction for thumbnail generation.

Pure functions over static data. The style tables are plain mappings; adding
a style means adding a row here and a member to models.domain.STYLES.
"""

from __future__ import annotations

from thumbsmith.models.domain import DEFAULT_STYLE

STYLE_PROMPTS: dict[str, str] = {
    "business": (
        "Professional business style. Clean corporate look with bold typography "
        "implications. Navy blue, white, and gold color scheme. Modern office or "
        "graph/chart imagery in background."
    ),
    "education": (
        "Educational/tutorial style. Bright, friendly, and approachable. Use warm "
        "colors (orange, yellow, teal). Include subtle icons or visual elements "
        "suggesting learning."
    ),
    "entertainment": (
        "Entertainment/vlog style. High energy, vibrant colors (red, yellow, "
        "electric blue). Dynamic composition with bold visual impact. "
        "Eye-catching and fun."
    ),
    "tech": (
        "Tech/programming style. Dark background with neon accents (cyan, purple, "
        "green). Futuristic/digital aesthetic. Circuit patterns or code-like "
        "visual elements."
    ),
    "lifestyle": (
        "Lifestyle/wellness style. Soft, natural colors (sage green, blush pink, "
        "cream). Warm lighting, cozy aesthetic. Minimalist and calming composition."
    ),
    "news": (
        "News/commentary style. Bold red and white color scheme with high contrast. "
        "Urgent, attention-grabbing design. Clean sans-serif typography feel."
    ),
}

# Display metadata for the style picker
STYLE_CATALOG: list[dict[str, str]] = [
    {
        "id": "business",
        "name": "Business",
        "description": "Corporate, marketing and side-business topics",
        "color": "#1e3a5f",
    },
    {
        "id": "education",
        "name": "Education",
        "description": "How-tos and tutorials",
        "color": "#e67e22",
    },
    {
        "id": "entertainment",
        "name": "Entertainment",
        "description": "Vlogs and variety",
        "color": "#e74c3c",
    },
    {
        "id": "tech",
        "name": "Tech",
        "description": "Programming and gadgets",
        "color": "#8e44ad",
    },
    {
        "id": "lifestyle",
        "name": "Lifestyle",
        "description": "Home, beauty and health",
        "color": "#27ae60",
    },
    {
        "id": "news",
        "name": "News",
        "description": "Current events and commentary",
        "color": "#c0392b",
    },
]

GENERATION_RULES = """CRITICAL RULES:
- DO NOT include any text, letters, numbers, words, or typography in the image
- NO Japanese characters, NO English text, NO numbers anywhere
- The image should be PURELY VISUAL - only graphics, photos, illustrations
- High visual impact that makes viewers want to click
- Clear focal point with strong composition
- Rich colors and high contrast for small thumbnail visibility
- Professional quality, not AI-looking
- The image should visually represent the topic without any text
- 16:9 aspect ratio (1280x720 equivalent composition)"""


def style_description(style: str) -> str:
    """Look up the visual direction for a style, falling back to business."""
    return STYLE_PROMPTS.get(style, STYLE_PROMPTS[DEFAULT_STYLE])


def build_prompt(title: str, style: str, keywords: str = "") -> str:
    """Build the provider prompt for a thumbnail.

    Deterministic: the same (title, style, keywords) always yields the same
    string. Contains no identity or quota information.

    Args:
        title: Trimmed video title, used literally.
        style: Style id; unknown ids use the business description.
        keywords: Optional keywords; the KEYWORDS line is omitted when empty.

    Returns:
        Prompt text.
    """
    lines = [
        "Create a YouTube thumbnail image (16:9 landscape ratio).",
        "",
        f'TOPIC: "{title}"',
    ]
    if keywords:
        lines.append(f"KEYWORDS: {keywords}")
    lines.extend(
        [
            "",
            f"STYLE: {style_description(style)}",
            "",
            GENERATION_RULES,
        ]
    )
    return "\n".join(lines)
