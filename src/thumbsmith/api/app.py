"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from thumbsmith.config import Settings, configure_logging, get_settings
from thumbsmith.core.origin import OriginGuard
from thumbsmith.gateway.orchestrator import GenerationGateway
from thumbsmith.providers import build_provider
from thumbsmith.quota import build_quota_store

logger = logging.getLogger(__name__)


def get_gateway(request: Request) -> GenerationGateway:
    """Dependency returning the gateway built at start-up."""
    return request.app.state.gateway


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the provider's HTTP client on shutdown."""
    yield
    provider = app.state.gateway.provider
    if provider is not None:
        provider.close()


def build_gateway(settings: Settings) -> GenerationGateway:
    """Wire provider, quota store and origin guard from settings."""
    return GenerationGateway(
        provider=build_provider(settings),
        quota_store=build_quota_store(settings),
        origin_guard=OriginGuard(settings.allowed_origins),
    )


def create_app(
    settings: Settings | None = None,
    gateway: GenerationGateway | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Service settings. Defaults to the environment.
        gateway: Pre-built gateway. Defaults to one built from settings.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Thumbsmith API",
        description="Rate-limited thumbnail generation gateway",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)

    # CORS for the browser client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include routes
    from thumbsmith.api.routes import generate, styles

    app.include_router(generate.router, prefix="/api")
    app.include_router(styles.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    if not settings.provider_configured:
        logger.warning("OPENAI_API_KEY not set; /api/generate will return 500")

    return app


# Default app instance
app = create_app()
