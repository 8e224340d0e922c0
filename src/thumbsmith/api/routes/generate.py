"""Generation API endpoints.

POST /api/generate - Generate a thumbnail (quota-limited)
GET /api/usage - Remaining quota for the caller
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from thumbsmith.api.app import get_gateway
from thumbsmith.core.errors import GatewayError
from thumbsmith.gateway.orchestrator import GenerationGateway
from thumbsmith.models.types import ErrorResponse, GenerateResponse, UsageResponse

router = APIRouter()

FORWARDED_FOR_HEADER = "x-forwarded-for"


@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_thumbnail(
    request: Request,
    gateway: GenerationGateway = Depends(get_gateway),
):
    """Generate a thumbnail from {videoTitle, style, keywords}.

    Returns:
        GenerateResponse, or an ErrorResponse with the mapped status code.
    """
    raw_body = await request.body()

    try:
        result = await run_in_threadpool(
            gateway.handle,
            raw_body,
            request.headers.get("origin"),
            request.headers.get(FORWARDED_FOR_HEADER),
        )
    except GatewayError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_payload())

    return GenerateResponse(
        image_url=result.image_url,
        revised_prompt=result.revised_prompt,
        remaining=result.remaining_quota,
    )


@router.get("/usage", response_model=UsageResponse)
def get_usage(
    request: Request,
    gateway: GenerationGateway = Depends(get_gateway),
) -> UsageResponse:
    """Return the daily limit and the caller's remaining quota."""
    remaining = gateway.remaining_for(request.headers.get(FORWARDED_FOR_HEADER))
    return UsageResponse(limit=gateway.daily_limit, remaining=remaining)
