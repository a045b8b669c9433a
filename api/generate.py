"""
API Endpoints for Site Generation

FastAPI app exposing the generation pipeline:
1. POST /api/generate-site         - buffered run, returns the PipelineResult
2. POST /api/generate-site/stream  - server-sent events while the run progresses
3. GET  /health                    - liveness
"""

import logging
import sys
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from sitegen.gateway import GatewayClient
from sitegen.models import PipelineInput, Tier
from sitegen.pipeline import PipelineOrchestrator, StreamingProtocolAdapter
from sitegen.utils.config import get_settings

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

app = FastAPI(
    title="Site Generation Pipeline",
    description="Turns a short request into a complete single-page website",
    version="0.1.0",
)

SUPPORTED_MODELS = (
    "anthropic/claude-sonnet-4-5",
    "anthropic/claude-opus-4-5",
)
DEFAULT_MODEL = "anthropic/claude-sonnet-4-5"


# ============================================================================
# LIFECYCLE
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Build the shared gateway once per process."""
    if not settings.ANTHROPIC_API_KEY:
        logger.warning("ANTHROPIC_API_KEY not configured - generation endpoints will return 500")
        return
    app.state.gateway = GatewayClient.from_settings(settings)
    logger.info(f"Gateway ready (model={app.state.gateway.model})")


@app.on_event("shutdown")
async def shutdown_event():
    gateway = getattr(app.state, "gateway", None)
    if gateway is not None:
        await gateway.close()
        app.state.gateway = None


def get_gateway(request: Request) -> Optional[GatewayClient]:
    """
    Shared gateway for the process, or None when no API key is configured.

    Built lazily if startup did not run. Tests override this dependency.
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None and settings.ANTHROPIC_API_KEY:
        gateway = GatewayClient.from_settings(settings)
        request.app.state.gateway = gateway
    return gateway


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateRequest(BaseModel):
    """Request to generate a site."""
    prompt: Optional[str] = Field(
        default=None,
        description="Natural-language description of the site",
    )
    tier: Optional[str] = Field(
        default=None,
        description="Quality tier: fast, balanced or best (unknown values use balanced)",
    )
    quality: Optional[str] = Field(
        default=None,
        description="Alias for tier",
    )
    model: Optional[str] = Field(
        default=None,
        description=f"One of {', '.join(SUPPORTED_MODELS)}; anything else uses the default",
    )


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _pipeline_input(body: GenerateRequest) -> PipelineInput:
    tier = Tier.parse(body.tier or body.quality or settings.DEFAULT_TIER)
    model = body.model if body.model in SUPPORTED_MODELS else DEFAULT_MODEL
    return PipelineInput(prompt=body.prompt.strip(), tier=tier, model=model)


def _validate(body: GenerateRequest, gateway: Optional[GatewayClient]) -> Optional[JSONResponse]:
    if not body.prompt or not body.prompt.strip():
        return _error(400, "prompt is required and must be a non-empty string")
    if gateway is None:
        return _error(500, "ANTHROPIC_API_KEY not configured")
    return None


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/generate-site")
async def generate_site(
    body: GenerateRequest,
    gateway: Optional[GatewayClient] = Depends(get_gateway),
):
    """Run the pipeline and return the full PipelineResult."""
    rejected = _validate(body, gateway)
    if rejected is not None:
        return rejected

    pipeline_input = _pipeline_input(body)
    logger.info(f"Generate request: tier={pipeline_input.tier.value} model={pipeline_input.model}")

    orchestrator = PipelineOrchestrator(gateway, review_threshold=settings.REVIEW_SCORE_THRESHOLD)
    try:
        result = await orchestrator.run(pipeline_input)
    except Exception as e:
        logger.error(f"Generation pipeline failed: {e}", exc_info=True)
        return _error(500, "Generation pipeline failed", str(e))

    return result.to_dict()


@app.post("/api/generate-site/stream")
async def generate_site_stream(
    body: GenerateRequest,
    gateway: Optional[GatewayClient] = Depends(get_gateway),
):
    """Run the pipeline, streaming progress as server-sent events."""
    rejected = _validate(body, gateway)
    if rejected is not None:
        return rejected

    pipeline_input = _pipeline_input(body)
    logger.info(f"Stream request: tier={pipeline_input.tier.value} model={pipeline_input.model}")

    adapter = StreamingProtocolAdapter(
        PipelineOrchestrator(gateway, review_threshold=settings.REVIEW_SCORE_THRESHOLD),
        flush_interval=settings.CHUNK_FLUSH_INTERVAL,
    )
    return StreamingResponse(
        adapter.stream(pipeline_input),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
