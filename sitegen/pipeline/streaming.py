"""
Streaming protocol adapter.

Turns pipeline events into server-sent-event frames:

    stage:start  - { stage, description }
    stage:chunk  - { markup, chars, lines, seq }   (codegen only, throttled)
    stage:done   - { stage, status, durationMs, summary?, error? }
    stage:error  - { stage, error }
    result       - full PipelineResult
    error        - { error, details }

This is the only place document deltas are buffered; upstream stages relay
every delta unmodified.
"""

import asyncio
import json
import logging
import time
from typing import Any, AsyncIterator, Callable, Dict, Optional

from ..models import (
    ContentPlan,
    IntentResult,
    PipelineInput,
    PipelineStageResult,
    QualityReport,
    StageName,
    StageStatus,
    StyleSystem,
)
from .events import (
    DocumentChunk,
    EventChannel,
    PipelineCancelled,
    StageCompleted,
    StageFailed,
    StageStarted,
)
from .orchestrator import PipelineOrchestrator

logger = logging.getLogger(__name__)

# At most one stage:chunk frame per interval (seconds)
CHUNK_FLUSH_INTERVAL = 0.3


def format_frame(event: str, data: Any) -> str:
    """Serialize one SSE frame."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


class ChunkThrottle:
    """
    Coalesces accumulated-document snapshots into at most one payload per
    interval. The first snapshot is always emitted; later ones within the
    interval are held as pending and replace each other.
    """

    def __init__(
        self,
        interval: float = CHUNK_FLUSH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.interval = interval
        self.clock = clock
        self.seq = 0
        self._last_emit: Optional[float] = None
        self._pending: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def offer(self, accumulated: str) -> Optional[Dict[str, Any]]:
        """Returns a chunk payload if one is due now, else buffers it."""
        now = self.clock()
        if self._last_emit is None or now - self._last_emit >= self.interval:
            return self._emit(accumulated, now)
        self._pending = accumulated
        return None

    def flush(self) -> Optional[Dict[str, Any]]:
        """Emit the pending snapshot, if any."""
        if self._pending is None:
            return None
        return self._emit(self._pending, self.clock())

    def _emit(self, accumulated: str, now: float) -> Dict[str, Any]:
        self.seq += 1
        self._last_emit = now
        self._pending = None
        return {
            "markup": accumulated,
            "chars": len(accumulated),
            "lines": accumulated.count("\n") + 1,
            "seq": self.seq,
        }


def stage_summary(result: PipelineStageResult) -> Optional[Dict[str, Any]]:
    """
    Compact per-stage projection for stage:done frames.

    Quality always carries its full report; the other stages only summarize
    on success.
    """
    data = result.data
    if result.stage == StageName.QUALITY and isinstance(data, QualityReport):
        return data.to_dict()
    if result.status != StageStatus.SUCCESS or data is None:
        return None

    if result.stage == StageName.INTENT and isinstance(data, IntentResult):
        return {
            "siteType": data.site_type,
            "mood": data.mood,
            "businessName": data.business_name,
            "confidence": data.confidence,
        }
    if result.stage == StageName.DESIGN and isinstance(data, StyleSystem):
        return {
            "primary": data.colors.primary,
            "background": data.colors.background,
            "displayFont": data.fonts.display,
            "bodyFont": data.fonts.body,
            "layoutPattern": data.layout_pattern,
        }
    if result.stage == StageName.CONTENT and isinstance(data, ContentPlan):
        return {
            "sectionCount": len(data.sections),
            "sections": list(data.section_ids),
        }
    return None


class StreamingProtocolAdapter:
    """
    Runs one pipeline per `stream()` call and yields SSE frames.

    Usage:
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(gateway))
        async for frame in adapter.stream(PipelineInput(prompt="...")):
            ...

    Closing the generator early (client disconnect) cancels the pipeline task.
    """

    def __init__(
        self,
        orchestrator: PipelineOrchestrator,
        flush_interval: float = CHUNK_FLUSH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.orchestrator = orchestrator
        self.flush_interval = flush_interval
        self.clock = clock

    async def stream(self, pipeline_input: PipelineInput) -> AsyncIterator[str]:
        channel = EventChannel()
        throttle = ChunkThrottle(self.flush_interval, self.clock)

        async def run():
            try:
                return await self.orchestrator.run(
                    pipeline_input, events=channel, stream_document=True
                )
            finally:
                channel.close()

        task = asyncio.create_task(run())
        try:
            async for event in channel:
                for frame in self._frames(event, throttle):
                    yield frame

            try:
                result = await task
            except Exception as e:
                logger.error(f"[Stream] Pipeline failed: {e}")
                yield format_frame("error", {"error": "Pipeline failed", "details": str(e)})
            else:
                yield format_frame("result", result.to_dict())
        finally:
            if not task.done():
                logger.info("[Stream] Client went away, cancelling pipeline")
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

    def _frames(self, event, throttle: ChunkThrottle):
        if isinstance(event, StageStarted):
            yield format_frame("stage:start", {"stage": event.stage, "description": event.description})

        elif isinstance(event, DocumentChunk):
            payload = throttle.offer(event.accumulated)
            if payload is not None:
                yield format_frame("stage:chunk", payload)

        elif isinstance(event, StageCompleted):
            if event.stage == StageName.CODEGEN:
                payload = throttle.flush()
                if payload is not None:
                    yield format_frame("stage:chunk", payload)

            result = event.result
            data: Dict[str, Any] = {
                "stage": result.stage,
                "status": result.status.value,
                "durationMs": result.duration_ms,
            }
            summary = stage_summary(result)
            if summary is not None:
                data["summary"] = summary
            if result.error:
                data["error"] = result.error
            yield format_frame("stage:done", data)

        elif isinstance(event, StageFailed):
            yield format_frame("stage:error", {"stage": event.stage, "error": event.error})

        elif isinstance(event, PipelineCancelled):
            yield format_frame(
                "error",
                {
                    "error": "Pipeline cancelled",
                    "details": f"{len(event.stages)} stage(s) completed before cancellation",
                    "stages": [s.to_dict() for s in event.stages],
                },
            )
