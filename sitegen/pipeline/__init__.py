"""
Generation Pipeline

Orchestration of the five stages plus the streaming protocol adapter.

Usage:
    orchestrator = PipelineOrchestrator(gateway)
    result = await orchestrator.run(PipelineInput(prompt="...", tier=Tier.FAST))
"""

from .events import (
    DocumentChunk,
    EventChannel,
    PipelineCancelled,
    StageCompleted,
    StageFailed,
    StageStarted,
)
from .orchestrator import PipelineOrchestrator, run_pipeline
from .streaming import (
    CHUNK_FLUSH_INTERVAL,
    ChunkThrottle,
    StreamingProtocolAdapter,
    format_frame,
    stage_summary,
)

__all__ = [
    # Orchestration
    "PipelineOrchestrator",
    "run_pipeline",
    # Events
    "EventChannel",
    "StageStarted",
    "StageCompleted",
    "StageFailed",
    "DocumentChunk",
    "PipelineCancelled",
    # Streaming
    "StreamingProtocolAdapter",
    "ChunkThrottle",
    "format_frame",
    "stage_summary",
    "CHUNK_FLUSH_INTERVAL",
]
