"""Pydantic models for the Thumbsmith HTTP API.

Field aliases keep the camelCase JSON contract expected by the browser client.
"""

from pydantic import BaseModel, ConfigDict, Field


class GenerateResponse(BaseModel):
    """Successful generation response."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(alias="imageUrl")
    revised_prompt: str | None = Field(default=None, alias="revisedPrompt")
    remaining: int


class ErrorResponse(BaseModel):
    """Failure response."""

    error: str
    remaining: int | None = None


class StyleOption(BaseModel):
    """One entry of the style catalog."""

    id: str
    name: str
    description: str
    color: str


class UsageResponse(BaseModel):
    """Quota status for the calling identity."""

    limit: int
    remaining: int
