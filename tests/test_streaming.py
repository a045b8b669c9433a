"""
Test Suite: Streaming Protocol Adapter

Tests SSE framing, the chunk throttle (with an injected clock), stage
summaries and the adapter's error and disconnect handling.
"""

import asyncio
import itertools
import json

import pytest

from sitegen.models import (
    ContentPlan,
    PipelineInput,
    PipelineStageResult,
    QualityReport,
    StageStatus,
    Tier,
)
from sitegen.pipeline import (
    ChunkThrottle,
    PipelineOrchestrator,
    StageStarted,
    StreamingProtocolAdapter,
    format_frame,
    stage_summary,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _parse(frames):
    parsed = []
    for frame in frames:
        assert frame.endswith("\n\n")
        event_line, data_line = frame.strip("\n").split("\n")
        assert event_line.startswith("event: ")
        assert data_line.startswith("data: ")
        parsed.append((event_line[len("event: "):], json.loads(data_line[len("data: "):])))
    return parsed


async def _collect(adapter, pipeline_input):
    return _parse([frame async for frame in adapter.stream(pipeline_input)])


class TestFormatFrame:
    """Test SSE frame serialization."""

    def test_frame_shape(self):
        frame = format_frame("stage:start", {"stage": "intent", "description": "Analyzing your request"})
        assert frame == 'event: stage:start\ndata: {"stage": "intent", "description": "Analyzing your request"}\n\n'

    def test_newlines_escaped(self):
        frame = format_frame("stage:chunk", {"markup": "<html>\n</html>"})
        assert frame.count("\n") == 3


class TestChunkThrottle:
    """Test chunk coalescing."""

    def test_first_chunk_emitted_immediately(self):
        throttle = ChunkThrottle(0.3, FakeClock(100.0))
        payload = throttle.offer("<!DOCTYPE html>")
        assert payload == {"markup": "<!DOCTYPE html>", "chars": 15, "lines": 1, "seq": 1}

    def test_at_most_one_chunk_per_interval(self):
        clock = FakeClock()
        throttle = ChunkThrottle(0.3, clock)

        emitted = []
        for t, text in [(0.0, "a"), (0.1, "ab"), (0.2, "abc"), (0.35, "abcd"), (0.5, "abcde"), (0.64, "abcdef")]:
            clock.now = t
            payload = throttle.offer(text)
            if payload:
                emitted.append((t, payload["markup"], payload["seq"]))

        assert emitted == [(0.0, "a", 1), (0.35, "abcd", 2)]
        assert throttle.pending

    def test_flush_emits_latest_pending(self):
        clock = FakeClock()
        throttle = ChunkThrottle(0.3, clock)
        throttle.offer("a")
        clock.now = 0.1
        throttle.offer("a\nb")
        clock.now = 0.2
        throttle.offer("a\nb\nc")

        payload = throttle.flush()
        assert payload == {"markup": "a\nb\nc", "chars": 5, "lines": 3, "seq": 2}
        assert not throttle.pending
        assert throttle.flush() is None

    def test_flush_without_pending(self):
        throttle = ChunkThrottle(0.3, FakeClock())
        assert throttle.flush() is None
        throttle.offer("a")
        assert throttle.flush() is None


class TestStageSummary:
    """Test stage:done projections."""

    def test_intent(self, sample_intent):
        summary = stage_summary(PipelineStageResult("intent", StageStatus.SUCCESS, 5, data=sample_intent))
        assert summary == {
            "siteType": "saas_landing",
            "mood": "dark_futuristic",
            "businessName": "FlowSync",
            "confidence": 0.92,
        }

    def test_design(self, sample_style):
        summary = stage_summary(PipelineStageResult("design", StageStatus.SUCCESS, 5, data=sample_style))
        assert summary == {
            "primary": "#06b6d4",
            "background": "#0a1628",
            "displayFont": "Space Grotesk",
            "bodyFont": "Inter",
            "layoutPattern": "dark_bento_cards",
        }

    def test_content(self, content_payload):
        plan = ContentPlan.from_dict(content_payload)
        summary = stage_summary(PipelineStageResult("content", StageStatus.SUCCESS, 5, data=plan))
        assert summary == {"sectionCount": 3, "sections": ["hero", "features", "cta"]}

    def test_quality_always_full_report(self):
        report = QualityReport.failure("x", category="structure")
        summary = stage_summary(PipelineStageResult("quality", StageStatus.ERROR, 5, data=report))
        assert summary == report.to_dict()

    def test_failed_or_skipped_stage_has_no_summary(self):
        assert stage_summary(PipelineStageResult("design", StageStatus.ERROR, 5, error="x")) is None
        assert stage_summary(PipelineStageResult("content", StageStatus.SKIPPED)) is None

    def test_codegen_has_no_summary(self, good_html):
        assert stage_summary(PipelineStageResult("codegen", StageStatus.SUCCESS, 5, data=good_html)) is None


class TestStreamingAdapter:
    """Test end-to-end SSE output."""

    @pytest.mark.asyncio
    async def test_frame_sequence(self, fake_gateway, good_html):
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(fake_gateway), clock=FakeClock())
        frames = await _collect(adapter, PipelineInput(prompt="Build a coming-soon page for FlowSync", tier=Tier.FAST))

        events = [name for name, _ in frames]
        assert events[0] == "stage:start"
        assert events[-1] == "result"
        assert "error" not in events

        done = {data["stage"]: data for name, data in frames if name == "stage:done"}
        assert list(done) == ["intent", "design", "codegen", "quality"]
        assert done["intent"]["summary"]["businessName"] == "FlowSync"
        assert done["design"]["summary"]["primary"] == "#06b6d4"
        assert done["quality"]["summary"]["score"] == 100
        assert "summary" not in done["codegen"]

        result = frames[-1][1]
        assert result["html"] == good_html
        assert result["tier"] == "fast"
        assert [s["stage"] for s in result["stages"]] == ["intent", "design", "content", "codegen", "quality"]

    @pytest.mark.asyncio
    async def test_terminal_flush_with_frozen_clock(self, make_gateway, good_html):
        # Clock never advances: only the first chunk goes out live, the rest
        # is delivered by exactly one flush when codegen completes.
        gateway = make_gateway(chunk_count=10)
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(gateway), clock=FakeClock())
        frames = await _collect(adapter, PipelineInput(prompt="x", tier=Tier.FAST))

        chunks = [data for name, data in frames if name == "stage:chunk"]
        assert [c["seq"] for c in chunks] == [1, 2]
        assert chunks[-1]["markup"] == good_html
        assert chunks[-1]["chars"] == len(good_html)
        assert chunks[-1]["lines"] == good_html.count("\n") + 1

        names = [name for name, _ in frames]
        flush_index = len(names) - 1 - names[::-1].index("stage:chunk")
        name, data = frames[flush_index + 1]
        assert name == "stage:done"
        assert data["stage"] == "codegen"

    @pytest.mark.asyncio
    async def test_no_terminal_flush_when_nothing_pending(self, make_gateway, good_html):
        ticks = itertools.count(0.0, 1.0)
        gateway = make_gateway(chunk_count=4)
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(gateway), clock=lambda: next(ticks))
        frames = await _collect(adapter, PipelineInput(prompt="x", tier=Tier.FAST))

        chunks = [data for name, data in frames if name == "stage:chunk"]
        assert chunks[-1]["markup"] == good_html
        assert [c["seq"] for c in chunks] == list(range(1, len(chunks) + 1))
        # Every delta was due, so each chunk is strictly longer than the last
        assert all(a["chars"] < b["chars"] for a, b in zip(chunks, chunks[1:]))

    @pytest.mark.asyncio
    async def test_stage_error_frames(self, make_gateway):
        gateway = make_gateway(design=RuntimeError("design exploded"))
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(gateway), clock=FakeClock())
        frames = await _collect(adapter, PipelineInput(prompt="x"))

        assert ("stage:error", {"stage": "design", "error": "design exploded"}) in frames
        design_done = [d for n, d in frames if n == "stage:done" and d["stage"] == "design"][0]
        assert design_done["status"] == "error"
        assert design_done["error"] == "design exploded"
        assert "summary" not in design_done
        assert frames[-1][0] == "result"

    @pytest.mark.asyncio
    async def test_codegen_failure_still_yields_result(self, make_gateway):
        gateway = make_gateway(codegen=RuntimeError("network down"))
        adapter = StreamingProtocolAdapter(PipelineOrchestrator(gateway), clock=FakeClock())
        frames = await _collect(adapter, PipelineInput(prompt="x"))

        name, result = frames[-1]
        assert name == "result"
        assert result["html"] == ""
        assert result["qualityReport"]["score"] == 0
        assert result["qualityReport"]["issues"][0]["severity"] == "critical"

    @pytest.mark.asyncio
    async def test_pipeline_exception_becomes_error_frame(self):
        class ExplodingOrchestrator:
            async def run(self, pipeline_input, events=None, stream_document=None):
                events.publish(StageStarted("intent", "Analyzing your request"))
                raise RuntimeError("kaboom")

        adapter = StreamingProtocolAdapter(ExplodingOrchestrator())
        frames = await _collect(adapter, PipelineInput(prompt="x"))

        assert frames == [
            ("stage:start", {"stage": "intent", "description": "Analyzing your request"}),
            ("error", {"error": "Pipeline failed", "details": "kaboom"}),
        ]

    @pytest.mark.asyncio
    async def test_disconnect_cancels_pipeline(self):
        class HangingOrchestrator:
            cancelled = False

            async def run(self, pipeline_input, events=None, stream_document=None):
                events.publish(StageStarted("intent", "Analyzing your request"))
                try:
                    await asyncio.sleep(60)
                except asyncio.CancelledError:
                    self.cancelled = True
                    raise

        orchestrator = HangingOrchestrator()
        stream = StreamingProtocolAdapter(orchestrator).stream(PipelineInput(prompt="x"))

        first = await stream.__anext__()
        assert first.startswith("event: stage:start")
        await stream.aclose()

        assert orchestrator.cancelled
